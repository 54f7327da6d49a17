"""Order creation: command, handler and the checkout entry point.

Placing an order and clearing the buyer's cart are two separate units of
work. The order is committed first. The cart clear that follows is
best-effort: if it fails the order still stands and the failure is logged.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.account.cart import clear_cart
from storefront.account.user import Actor
from storefront.catalogue.lookup import require_product
from storefront.domain import storefront
from storefront.ordering.order import Order
from storefront.ordering.queries import load_order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_ADDRESS_PARTS = ("street", "city", "state", "zip_code", "country")


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {"product_id", "quantity"}
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = String(required=True, max_length=20)
    items_price = Float(default=0.0)
    tax_price = Float(default=0.0)
    shipping_price = Float(default=0.0)
    total_price = Float(default=0.0)


def _requested_lines(items_data):
    if not isinstance(items_data, list) or not items_data:
        raise ValidationError({"items": ["No order items"]})

    lines = []
    for entry in items_data:
        if not isinstance(entry, dict) or not entry.get("product_id"):
            raise ValidationError({"items": ["Each order item needs a product_id"]})
        quantity = entry.get("quantity", 1)
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"items": ["Quantity must be a whole number of at least 1"]})
        lines.append((entry["product_id"], quantity))
    return lines


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )
        if not isinstance(address, dict):
            raise ValidationError({"shipping_address": ["Shipping address is required"]})

        # Resolve every product before building anything: one miss fails the whole order.
        lines = [(require_product(product_id), quantity) for product_id, quantity in _requested_lines(items_data)]

        order = Order.place(
            user_id=command.user_id,
            lines=lines,
            shipping_address={part: address.get(part) for part in _ADDRESS_PARTS},
            payment_method=command.payment_method,
            pricing={
                "items_price": command.items_price or 0.0,
                "tax_price": command.tax_price or 0.0,
                "shipping_price": command.shipping_price or 0.0,
                "total_price": command.total_price or 0.0,
            },
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            item_count=len(lines),
            total_price=order.total_price,
        )
        return str(order.id)


def _clear_cart_after_order(user_id, order_id) -> None:
    try:
        clear_cart(user_id)
    except Exception as exc:
        logger.warning(
            "Failed to clear cart after order",
            user_id=str(user_id),
            order_id=str(order_id),
            error=repr(exc),
            exc_info=True,
        )


def place_order(actor: Actor, items, shipping_address, payment_method, pricing=None) -> Order:
    """Create an order for ``actor`` and then empty their cart.

    Args:
        items: list of ``{"product_id": ..., "quantity": ...}`` dicts.
        shipping_address: dict with street, city, state, zip_code, country.
        pricing: dict with any of items_price, tax_price, shipping_price,
            total_price. Stored as given.
    """
    pricing = pricing or {}
    order_id = current_domain.process(
        PlaceOrder(
            user_id=actor.user_id,
            items=json.dumps(items or []),
            shipping_address=json.dumps(shipping_address or {}),
            payment_method=payment_method,
            items_price=pricing.get("items_price", 0.0),
            tax_price=pricing.get("tax_price", 0.0),
            shipping_price=pricing.get("shipping_price", 0.0),
            total_price=pricing.get("total_price", 0.0),
        ),
        asynchronous=False,
    )

    _clear_cart_after_order(actor.user_id, order_id)
    return load_order(order_id)
