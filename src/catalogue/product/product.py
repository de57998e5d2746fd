"""Product aggregate root with Review and Image entities.

``ratings`` and ``num_of_reviews`` are derived from the review collection.
They change only through ``submit_review`` and ``remove_review``, which run
the pure aggregation in ``catalogue.product.rating`` and write its result back
onto the aggregate in one atomic change.
"""

from datetime import datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from catalogue.domain import catalogue
from catalogue.product.rating import RatingUpdate, ReviewEntry, remove_review, upsert_review

MAX_PRICE = 99999999.0
MAX_STOCK = 9999


@catalogue.entity(part_of="Product")
class Review:
    """A reviewer's rating and comment. One per reviewer per product."""

    reviewer_id: Identifier(required=True)
    reviewer_name: String(max_length=100)
    rating: Float(required=True)
    comment: Text()
    created_at: DateTime(default=datetime.now)


@catalogue.entity(part_of="Product")
class Image:
    """Product image hosted on an external media store."""

    public_id: String(required=True, max_length=255)
    url: String(required=True, max_length=500)


@catalogue.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=100)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0, max_value=MAX_PRICE)
    category: String(required=True, max_length=100)
    stock: Integer(default=1, min_value=0, max_value=MAX_STOCK)
    images: HasMany(Image)
    reviews: HasMany(Review)
    ratings: Float(default=0.0)
    num_of_reviews: Integer(default=0)
    created_by: Identifier()
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def review_count_matches_reviews(self):
        if self.num_of_reviews != len(self.reviews):
            raise ValidationError({"num_of_reviews": ["Review count must equal the number of reviews"]})

    @invariant.post
    def one_review_per_reviewer(self):
        reviewer_ids = [str(r.reviewer_id) for r in self.reviews]
        if len(reviewer_ids) != len(set(reviewer_ids)):
            raise ValidationError({"reviews": ["A reviewer can hold only one review per product"]})

    @classmethod
    def create(cls, name, description, price, category, stock=None, images=None, created_by=None):
        from catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            description=description,
            price=price,
            category=category,
            stock=stock if stock is not None else 1,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        for image in images or []:
            product.add_images(Image(public_id=image["public_id"], url=image["url"]))

        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                category=product.category,
                price=product.price,
                stock=product.stock,
                created_by=created_by,
                created_at=now,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, category=None, stock=None, images=None):
        """Apply a partial update. Fields left as ``None`` are not touched."""
        from catalogue.product.events import ProductUpdated

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if category is not None:
            self.category = category
        if stock is not None:
            self.stock = stock
        if images is not None:
            self._replace_images(images)

        self.updated_at = datetime.now()

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                category=self.category,
                price=self.price,
                stock=self.stock,
                updated_at=self.updated_at,
            )
        )

    def _replace_images(self, images):
        with atomic_change(self):
            for image in list(self.images):
                self.remove_images(image)
            for image in images:
                self.add_images(Image(public_id=image["public_id"], url=image["url"]))

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    def review_entries(self) -> tuple[ReviewEntry, ...]:
        """Current reviews as immutable snapshots, in stored order."""
        return tuple(
            ReviewEntry(
                review_id=str(review.id),
                reviewer_id=str(review.reviewer_id),
                reviewer_name=review.reviewer_name,
                rating=review.rating,
                comment=review.comment,
            )
            for review in self.reviews
        )

    def submit_review(self, reviewer_id, reviewer_name, rating, comment=None):
        """Create the reviewer's review, or overwrite its rating and comment."""
        from catalogue.product.events import ProductReviewed

        try:
            rating = float(rating)
        except (TypeError, ValueError):
            raise ValidationError({"rating": ["Rating must be a number"]}) from None

        previous = {entry.review_id for entry in self.review_entries()}
        update = upsert_review(self.review_entries(), reviewer_id, reviewer_name, rating, comment)
        self._apply_rating_update(update)

        entry = next(e for e in update.reviews if e.reviewer_id == str(reviewer_id))
        now = datetime.now()
        self.raise_(
            ProductReviewed(
                product_id=self.id,
                review_id=entry.review_id,
                reviewer_id=entry.reviewer_id,
                rating=entry.rating,
                is_update=entry.review_id in previous,
                ratings=self.ratings,
                num_of_reviews=self.num_of_reviews,
                reviewed_at=now,
            )
        )
        return entry

    def remove_review(self, review_id):
        """Remove a review by its identifier. Unknown identifiers change nothing."""
        from catalogue.product.events import ProductReviewRemoved

        before = self.num_of_reviews
        update = remove_review(self.review_entries(), review_id)
        self._apply_rating_update(update)

        if update.num_of_reviews < before:
            self.raise_(
                ProductReviewRemoved(
                    product_id=self.id,
                    review_id=str(review_id),
                    ratings=self.ratings,
                    num_of_reviews=self.num_of_reviews,
                    removed_at=datetime.now(),
                )
            )

    def _apply_rating_update(self, update: RatingUpdate):
        wanted = {entry.review_id: entry for entry in update.reviews}

        with atomic_change(self):
            for review in list(self.reviews):
                if str(review.id) not in wanted:
                    self.remove_reviews(review)

            existing = {str(review.id): review for review in self.reviews}
            for entry in update.reviews:
                review = existing.get(entry.review_id)
                if review is None:
                    self.add_reviews(
                        Review(
                            id=entry.review_id,
                            reviewer_id=entry.reviewer_id,
                            reviewer_name=entry.reviewer_name,
                            rating=entry.rating,
                            comment=entry.comment,
                        )
                    )
                elif review.rating != entry.rating or review.comment != entry.comment:
                    review.rating = entry.rating
                    review.comment = entry.comment

            self.num_of_reviews = update.num_of_reviews
            self.ratings = update.ratings
            self.updated_at = datetime.now()
