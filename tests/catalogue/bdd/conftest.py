"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from catalogue.product.events import (
    ProductCreated,
    ProductReviewed,
    ProductReviewRemoved,
    ProductUpdated,
)
from catalogue.product.product import Product
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_PRODUCT_EVENT_CLASSES = {
    "ProductCreated": ProductCreated,
    "ProductUpdated": ProductUpdated,
    "ProductReviewed": ProductReviewed,
    "ProductReviewRemoved": ProductReviewRemoved,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a product with no reviews", target_fixture="product")
def product_with_no_reviews():
    product = Product.create(
        name="Test Product",
        description="A test product description",
        price=50.0,
        category="General",
    )
    product._events.clear()
    return product


@given(parsers.cfparse('the product was reviewed by "{reviewer}" with rating {rating:d}'), target_fixture="product")
def product_reviewed_by(product, reviewer, rating):
    product.submit_review(reviewer_id=reviewer, reviewer_name=reviewer.title(), rating=rating)
    product._events.clear()
    return product


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("the review count is {count:d}"))
def review_count_is(product, count):
    assert product.num_of_reviews == count
    assert len(product.reviews) == count


@then(parsers.cfparse("the product rating is {rating:f}"))
def product_rating_is(product, rating):
    assert product.ratings == pytest.approx(rating)


@then(parsers.cfparse("a {event_type} product event is raised"))
def product_event_raised(product, event_type):
    event_cls = _PRODUCT_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in product._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in product._events]}"


@then("no product event is raised")
def no_product_event_raised(product):
    assert product._events == []
