"""Tests for the Product aggregate."""

import json

import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.events import ProductCreated, ProductUpdated
from storefront.catalogue.product import PLACEHOLDER_IMAGE, Product, ProductCategory


def _make_product(**overrides):
    defaults = {"name": "Desk Lamp", "description": "Warm LED desk lamp", "price": 30.0}
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_defaults(self):
        product = _make_product()
        assert product.category == ProductCategory.OTHER.value
        assert product.image == PLACEHOLDER_IMAGE
        assert product.in_stock is True
        assert product.quantity == 0
        assert product.rating == 0.0
        assert product.featured is False
        assert product.tag_list == []
        assert product.specification_map == {}

    def test_create_raises_event(self):
        product = _make_product(category="Books")
        events = [e for e in product._events if isinstance(e, ProductCreated)]
        assert len(events) == 1
        assert events[0].product_id == str(product.id)
        assert events[0].category == "Books"

    def test_tags_and_specifications_round_trip(self):
        product = _make_product(tags=["lamp", "led"], specifications={"Power": "9W"})
        assert product.tag_list == ["lamp", "led"]
        assert product.specification_map == {"Power": "9W"}

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(category="Groceries")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(price=-1.0)

    def test_rating_above_five_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(rating=5.5)

    def test_specification_values_must_be_strings(self):
        with pytest.raises(ValidationError) as exc_info:
            Product(
                name="Lamp",
                description="Lamp",
                price=1.0,
                specifications=json.dumps({"Power": 9}),
            )
        assert "specifications" in exc_info.value.messages


class TestDiscountPercentage:
    def test_discount_when_marked_down(self):
        product = _make_product(price=199.99, original_price=249.99)
        assert product.discount_percentage == 20

    def test_no_discount_without_original_price(self):
        assert _make_product(price=10.0).discount_percentage == 0

    def test_no_discount_when_original_not_higher(self):
        assert _make_product(price=10.0, original_price=10.0).discount_percentage == 0
        assert _make_product(price=12.0, original_price=10.0).discount_percentage == 0

    def test_half_percent_rounds_up(self):
        # 12.5% off
        assert _make_product(price=70.0, original_price=80.0).discount_percentage == 13


class TestUpdateDetails:
    def test_update_changes_fields_and_raises_event(self):
        product = _make_product()
        product.update_details(price=25.0, featured=True, tags=["sale"])
        assert product.price == 25.0
        assert product.featured is True
        assert product.tag_list == ["sale"]

        events = [e for e in product._events if isinstance(e, ProductUpdated)]
        assert len(events) == 1
        assert set(json.loads(events[0].changed_fields)) == {"price", "featured", "tags"}

    def test_none_values_are_ignored(self):
        product = _make_product()
        product.update_details(price=None, name=None)
        assert product.price == 30.0
        assert not [e for e in product._events if isinstance(e, ProductUpdated)]

    def test_unknown_field_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.update_details(created_at=None)
