"""Tests for the order access predicates."""

import pytest

from storefront.account.user import Actor, Role
from storefront.catalogue.product import Product
from storefront.errors import Forbidden
from storefront.ordering.access import can_access_order, ensure_admin, ensure_can_access, ensure_owner, is_order_owner
from storefront.ordering.order import Order

OWNER_ID = "owner-1"


def _owner():
    return Actor(user_id=OWNER_ID, role=Role.USER.value)


def _stranger():
    return Actor(user_id="stranger-1", role=Role.USER.value)


def _admin():
    return Actor(user_id="admin-1", role=Role.ADMIN.value)


@pytest.fixture()
def order():
    product = Product.create(name="Pen", description="Blue pen", price=1.5)
    return Order.place(
        user_id=OWNER_ID,
        lines=[(product, 1)],
        shipping_address={"street": "s", "city": "c", "state": "st", "zip_code": "z", "country": "co"},
        payment_method="cash",
    )


class TestCanAccessOrder:
    def test_owner(self, order):
        assert can_access_order(_owner(), order) is True

    def test_admin(self, order):
        assert can_access_order(_admin(), order) is True

    def test_stranger(self, order):
        assert can_access_order(_stranger(), order) is False
        with pytest.raises(Forbidden):
            ensure_can_access(_stranger(), order)


class TestIsOrderOwner:
    def test_owner_only(self, order):
        assert is_order_owner(_owner(), order) is True
        assert is_order_owner(_admin(), order) is False

    def test_admin_is_not_owner(self, order):
        with pytest.raises(Forbidden):
            ensure_owner(_admin(), order)


class TestEnsureAdmin:
    def test_admin_passes(self):
        ensure_admin(_admin())

    def test_user_rejected(self):
        with pytest.raises(Forbidden):
            ensure_admin(_owner())
