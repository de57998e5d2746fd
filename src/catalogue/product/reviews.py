"""Product reviews: submit (insert or update) and delete.

Each handler is a read-modify-write of the whole Product aggregate: load,
aggregate the reviews in memory, save. Two concurrent writers on the same
product race, and the last save wins.
"""

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.listing import load_product
from catalogue.product.product import Product
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)


@catalogue.command(part_of="Product")
class SubmitReview:
    product_id: Identifier(required=True)
    reviewer_id: Identifier(required=True)
    reviewer_name: String(max_length=100)
    rating: Float(required=True)
    comment: Text()


@catalogue.command(part_of="Product")
class DeleteReview:
    product_id: Identifier(required=True)
    review_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class ManageReviewsHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        product = load_product(command.product_id)
        entry = product.submit_review(
            reviewer_id=command.reviewer_id,
            reviewer_name=command.reviewer_name,
            rating=command.rating,
            comment=command.comment,
        )
        current_domain.repository_for(Product).add(product)

        logger.info(
            "Review submitted",
            product_id=str(product.id),
            review_id=entry.review_id,
            reviewer_id=entry.reviewer_id,
            ratings=product.ratings,
            num_of_reviews=product.num_of_reviews,
        )
        return str(product.id)

    @handle(DeleteReview)
    def delete_review(self, command):
        product = load_product(command.product_id)
        product.remove_review(command.review_id)
        current_domain.repository_for(Product).add(product)

        logger.info(
            "Review deleted",
            product_id=str(product.id),
            review_id=str(command.review_id),
            num_of_reviews=product.num_of_reviews,
        )
        return str(product.id)
