"""BDD scenarios for the shopping cart and wishlist."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

from storefront.account.cart import add_to_cart, remove_from_cart
from storefront.account.user import User
from storefront.account.wishlist import toggle_wishlist
from storefront.errors import NotFound

scenarios("features/cart.feature")


@pytest.fixture()
def products():
    return {}


@pytest.fixture()
def error():
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a registered shopper", target_fixture="shopper")
def registered_shopper(make_user):
    return make_user(name="Bea Buyer", email="bea@example.com")


@given(parsers.cfparse('a product "{name}" priced at {price:f}'))
def a_product(make_product, products, name, price):
    products[name] = make_product(name=name, price=price)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper adds {quantity:d} of "{name}" to the cart'))
def add_named_product(shopper, products, quantity, name):
    add_to_cart(shopper.id, products[name].id, quantity)


@when(parsers.cfparse("the shopper adds {quantity:d} of an unknown product to the cart"))
def add_unknown_product(shopper, quantity, error):
    try:
        add_to_cart(shopper.id, "prod-unknown", quantity)
    except NotFound as exc:
        error["exc"] = exc


@when(parsers.cfparse('the shopper removes "{name}" from the cart'))
def remove_named_product(shopper, products, name):
    remove_from_cart(shopper.id, products[name].id)


@when(parsers.cfparse('the shopper toggles "{name}" on the wishlist'))
def toggle_named_product(shopper, products, name):
    toggle_wishlist(shopper.id, products[name].id)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
def _reload(shopper):
    return current_domain.repository_for(User).get(shopper.id)


@then(parsers.cfparse("the cart has {count:d} line"))
@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_lines(shopper, count):
    assert len(_reload(shopper).cart_items) == count


@then(parsers.cfparse('the cart line for "{name}" has quantity {quantity:d}'))
def cart_line_quantity(shopper, products, name, quantity):
    line = _reload(shopper).cart_line(products[name].id)
    assert line is not None
    assert line.quantity == quantity


@then("the request fails because the product was not found")
def request_failed_not_found(error):
    assert isinstance(error.get("exc"), NotFound)


@then("the wishlist is empty")
def wishlist_is_empty(shopper):
    assert len(_reload(shopper).wishlist_items) == 0
