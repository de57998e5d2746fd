"""Tests for the Product aggregate root."""

import pytest
from catalogue.product.events import ProductCreated, ProductUpdated
from catalogue.product.product import MAX_STOCK, Image, Product, Review
from protean.exceptions import ValidationError
from protean.utils import DomainObjects
from protean.utils.reflection import declared_fields


def _make_product(**overrides):
    defaults = {
        "name": "Smartphone X",
        "description": "A great smartphone",
        "price": 499.0,
        "category": "Electronics",
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductConstruction:
    def test_element_types(self):
        assert Product.element_type == DomainObjects.AGGREGATE
        assert Review.element_type == DomainObjects.ENTITY
        assert Image.element_type == DomainObjects.ENTITY

    def test_declared_fields(self):
        fields = declared_fields(Product)
        for name in (
            "name",
            "description",
            "price",
            "category",
            "stock",
            "images",
            "reviews",
            "ratings",
            "num_of_reviews",
            "created_by",
            "created_at",
            "updated_at",
        ):
            assert name in fields

    def test_create_minimal(self):
        product = _make_product()

        assert product.name == "Smartphone X"
        assert product.price == 499.0
        assert product.stock == 1
        assert product.ratings == 0.0
        assert product.num_of_reviews == 0
        assert len(product.reviews) == 0
        assert product.created_at is not None
        assert product.updated_at is not None

    def test_create_full(self):
        product = _make_product(
            stock=25,
            created_by="admin-1",
            images=[{"public_id": "products/p1", "url": "https://cdn.example.com/p1.jpg"}],
        )

        assert product.stock == 25
        assert product.created_by == "admin-1"
        assert len(product.images) == 1
        assert product.images[0].public_id == "products/p1"

    def test_create_raises_product_created(self):
        product = _make_product(created_by="admin-1")

        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductCreated)
        assert event.product_id == product.id
        assert event.name == "Smartphone X"
        assert event.created_by == "admin-1"


class TestProductFieldRules:
    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            _make_product(name=None)

    def test_name_longer_than_100_characters_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_product(name="x" * 101)
        assert "name" in exc.value.messages

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_product(price=-1)
        assert "price" in exc.value.messages

    def test_price_above_limit_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(price=100000000)

    def test_stock_above_limit_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_product(stock=MAX_STOCK + 1)
        assert "stock" in exc.value.messages

    def test_stock_at_limit_is_accepted(self):
        assert _make_product(stock=MAX_STOCK).stock == MAX_STOCK

    def test_zero_stock_is_kept(self):
        assert _make_product(stock=0).stock == 0


class TestUpdateDetails:
    def test_partial_update_leaves_other_fields(self):
        product = _make_product(stock=5)
        product._events.clear()

        product.update_details(price=450.0)

        assert product.price == 450.0
        assert product.name == "Smartphone X"
        assert product.stock == 5

    def test_update_moves_updated_at(self):
        product = _make_product()
        before = product.updated_at

        product.update_details(name="Smartphone X2")

        assert product.name == "Smartphone X2"
        assert product.updated_at >= before

    def test_update_raises_product_updated(self):
        product = _make_product()
        product._events.clear()

        product.update_details(category="Phones", stock=3)

        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductUpdated)
        assert event.category == "Phones"
        assert event.stock == 3

    def test_images_are_replaced_as_a_set(self):
        product = _make_product(
            images=[
                {"public_id": "old/1", "url": "https://cdn.example.com/old1.jpg"},
                {"public_id": "old/2", "url": "https://cdn.example.com/old2.jpg"},
            ]
        )

        product.update_details(images=[{"public_id": "new/1", "url": "https://cdn.example.com/new1.jpg"}])

        assert [image.public_id for image in product.images] == ["new/1"]

    def test_invalid_update_is_rejected(self):
        product = _make_product()

        with pytest.raises(ValidationError):
            product.update_details(price=-10)

    def test_update_does_not_touch_reviews(self):
        product = _make_product()
        product.submit_review(reviewer_id="u1", reviewer_name="Alice", rating=4)

        product.update_details(name="Renamed")

        assert product.num_of_reviews == 1
        assert product.ratings == 4.0
