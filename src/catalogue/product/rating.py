"""Review aggregation: mean rating and review count of a product.

Pure transforms: each function takes the current reviews by value and returns
a new collection together with the recomputed ``num_of_reviews`` and
``ratings``. Persisting the result is the caller's job.

Ratings are coerced to numbers but never range-checked here. A 0 or a 7 is
aggregated like any other value.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from uuid import uuid4


@dataclass(frozen=True)
class ReviewEntry:
    """Snapshot of a single review attached to a product."""

    review_id: str
    reviewer_id: str
    reviewer_name: str | None
    rating: float
    comment: str | None = None


@dataclass(frozen=True)
class RatingUpdate:
    """Result of applying a review change to a product's reviews."""

    reviews: tuple[ReviewEntry, ...]
    num_of_reviews: int
    ratings: float


def mean_rating(reviews: Iterable[ReviewEntry]) -> float:
    """Arithmetic mean of all ratings, 0 for an empty collection."""
    ratings = [review.rating for review in reviews]
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


def _summarize(reviews: tuple[ReviewEntry, ...]) -> RatingUpdate:
    return RatingUpdate(reviews=reviews, num_of_reviews=len(reviews), ratings=mean_rating(reviews))


def upsert_review(
    reviews: Iterable[ReviewEntry],
    reviewer_id,
    reviewer_name: str | None,
    rating,
    comment: str | None = None,
) -> RatingUpdate:
    """Insert or update the review held by ``reviewer_id``.

    An existing review keeps its identity, position and display name; only
    rating and comment change. Otherwise a new entry is appended.
    """
    rating = float(rating)
    reviewer_id = str(reviewer_id)

    updated = []
    found = False
    for review in reviews:
        if review.reviewer_id == reviewer_id:
            review = replace(review, rating=rating, comment=comment)
            found = True
        updated.append(review)

    if not found:
        updated.append(
            ReviewEntry(
                review_id=str(uuid4()),
                reviewer_id=reviewer_id,
                reviewer_name=reviewer_name,
                rating=rating,
                comment=comment,
            )
        )

    return _summarize(tuple(updated))


def remove_review(reviews: Iterable[ReviewEntry], review_id) -> RatingUpdate:
    """Drop the review identified by ``review_id``; unknown ids are a no-op."""
    review_id = str(review_id)
    return _summarize(tuple(review for review in reviews if review.review_id != review_id))
