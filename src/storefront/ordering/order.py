"""Order aggregate: a snapshot of purchased lines plus the fulfilment state machine.

Status values:
    pending → processing (paid) → shipped → delivered
    cancelled (from anything except shipped and delivered)

Payment and delivery flags are tracked beside the status. Administrators may
set any status directly, so the flags and the status can disagree; delivery
in particular does not require payment.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.errors import InvalidState
from storefront.ordering.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPaid,
    OrderPlaced,
    OrderStatusChanged,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    CARD = "card"
    PAYPAL = "paypal"
    STRIPE = "stripe"
    CASH = "cash"


_NON_CANCELLABLE_STATES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED}


def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError({"status": ["Invalid status"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)

    @invariant.post
    def parts_must_not_be_blank(self):
        for part in ("street", "city", "state", "zip_code", "country"):
            value = getattr(self, part)
            if value is not None and not value.strip():
                raise ValidationError({part: ["is required"]})


@storefront.value_object(part_of="Order")
class OrderPricing:
    """Totals as supplied by the client. They are stored, never recomputed."""

    items_price = Float(default=0.0)
    tax_price = Float(default=0.0)
    shipping_price = Float(default=0.0)
    total_price = Float(default=0.0)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    image = String(max_length=500)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(required=True, choices=PaymentMethod)
    pricing = ValueObject(OrderPricing)
    is_paid = Boolean(default=False)
    paid_at = DateTime()
    payment_result = Text()  # JSON object, opaque gateway receipt
    is_delivered = Boolean(default=False)
    delivered_at = DateTime()
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines, shipping_address, payment_method, pricing=None):
        """Create a pending order.

        Args:
            lines: ``(product, quantity)`` pairs. Each product's name, image
                and current price are copied into its line item.
            shipping_address: dict with street, city, state, zip_code, country.
            pricing: dict with any of items_price, tax_price, shipping_price,
                total_price.
        """
        if not lines:
            raise ValidationError({"items": ["No order items"]})
        if not shipping_address:
            raise ValidationError({"shipping_address": ["Shipping address is required"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=str(user_id),
            shipping_address=ShippingAddress(**shipping_address),
            payment_method=payment_method,
            pricing=OrderPricing(**(pricing or {})),
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for product, quantity in lines:
            order.add_items(
                OrderItem(
                    product_id=str(product.id),
                    name=product.name,
                    image=product.image,
                    price=product.price,
                    quantity=quantity,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                item_count=len(lines),
                payment_method=order.payment_method,
                total_price=order.total_price,
                placed_at=now,
            )
        )
        return order

    @property
    def total_price(self) -> float:
        return self.pricing.total_price if self.pricing else 0.0

    @property
    def payment_receipt(self) -> dict:
        return json.loads(self.payment_result) if self.payment_result else {}

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def mark_paid(self, payment_result=None):
        """Record payment. Moves the order to processing whatever its current status."""
        now = datetime.now(UTC)
        with atomic_change(self):
            self.is_paid = True
            self.paid_at = now
            self.status = OrderStatus.PROCESSING.value
            self.payment_result = json.dumps(payment_result or {})
            self.updated_at = now

        self.raise_(OrderPaid(order_id=str(self.id), user_id=str(self.user_id), paid_at=now))

    def mark_delivered(self):
        """Record delivery. Does not require the order to be paid."""
        now = datetime.now(UTC)
        with atomic_change(self):
            self.is_delivered = True
            self.delivered_at = now
            self.status = OrderStatus.DELIVERED.value
            self.updated_at = now

        self.raise_(OrderDelivered(order_id=str(self.id), was_paid=bool(self.is_paid), delivered_at=now))

    def set_status(self, new_status):
        """Move directly to ``new_status``. Any status may follow any other."""
        target = parse_status(new_status)

        previous = self.status
        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = target.value
            if target == OrderStatus.DELIVERED:
                self.is_delivered = True
                self.delivered_at = now
            self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )

    def cancel(self, cancelled_by):
        current = OrderStatus(self.status)
        if current in _NON_CANCELLABLE_STATES:
            raise InvalidState("Cannot cancel order that has been shipped or delivered")

        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = OrderStatus.CANCELLED.value
            self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                previous_status=current.value,
                cancelled_by=str(cancelled_by),
                cancelled_at=now,
            )
        )
