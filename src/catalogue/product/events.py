"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = "v1"

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    stock: Integer()
    created_by: Identifier()
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductUpdated:
    """Product details were changed by an administrator."""

    __version__ = "v1"

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    stock: Integer()
    updated_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductReviewed:
    """A review was submitted, either new or replacing the reviewer's previous one."""

    __version__ = "v1"

    product_id: Identifier(required=True)
    review_id: Identifier(required=True)
    reviewer_id: Identifier(required=True)
    rating: Float(required=True)
    is_update: Boolean(required=True)
    ratings: Float(required=True)
    num_of_reviews: Integer(required=True)
    reviewed_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductReviewRemoved:
    """A review was removed from a product."""

    __version__ = "v1"

    product_id: Identifier(required=True)
    review_id: Identifier(required=True)
    ratings: Float(required=True)
    num_of_reviews: Integer(required=True)
    removed_at: DateTime(required=True)
