"""Application tests for payment, delivery, status changes, cancellation and reads."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.errors import Forbidden, InvalidState, NotFound
from storefront.ordering.cancellation import cancel_order
from storefront.ordering.creation import place_order
from storefront.ordering.fulfillment import MarkOrderDelivered, mark_delivered, set_status
from storefront.ordering.order import Order
from storefront.ordering.payment import mark_paid
from storefront.ordering.queries import get_order

ADDRESS = {"street": "1 Main St", "city": "Springfield", "state": "IL", "zip_code": "62701", "country": "US"}


@pytest.fixture()
def order(customer, product):
    return place_order(customer.as_actor(), [{"product_id": product.id, "quantity": 1}], ADDRESS, "card")


class TestMarkPaid:
    def test_owner_can_pay(self, customer, order):
        paid = mark_paid(customer.as_actor(), order.id, {"id": "pay-1"})
        assert paid.is_paid is True
        assert paid.paid_at is not None
        assert paid.status == "processing"
        assert paid.payment_receipt == {"id": "pay-1"}

    def test_payment_result_defaults_to_empty(self, customer, order):
        assert mark_paid(customer.as_actor(), order.id).payment_receipt == {}

    def test_admin_cannot_pay_for_customer(self, admin, order):
        with pytest.raises(Forbidden):
            mark_paid(admin.as_actor(), order.id)
        assert current_domain.repository_for(Order).get(order.id).is_paid is False

    def test_other_user_cannot_pay(self, other_customer, order):
        with pytest.raises(Forbidden):
            mark_paid(other_customer.as_actor(), order.id)

    def test_unknown_order(self, customer):
        with pytest.raises(NotFound):
            mark_paid(customer.as_actor(), "order-missing")


class TestMarkDelivered:
    def test_admin_marks_unpaid_order_delivered(self, admin, order):
        delivered = mark_delivered(admin.as_actor(), order.id)
        assert delivered.is_delivered is True
        assert delivered.delivered_at is not None
        assert delivered.status == "delivered"
        assert delivered.is_paid is False

    def test_owner_cannot_mark_delivered(self, customer, order):
        with pytest.raises(Forbidden):
            mark_delivered(customer.as_actor(), order.id)

    def test_role_is_checked_before_existence(self, customer):
        with pytest.raises(Forbidden):
            current_domain.process(
                MarkOrderDelivered(order_id="order-missing", actor_id=customer.id, actor_role="user"),
                asynchronous=False,
            )

    def test_admin_unknown_order(self, admin):
        with pytest.raises(NotFound):
            mark_delivered(admin.as_actor(), "order-missing")


class TestSetStatus:
    def test_admin_sets_any_status(self, admin, order):
        assert set_status(admin.as_actor(), order.id, "shipped").status == "shipped"
        assert set_status(admin.as_actor(), order.id, "pending").status == "pending"

    def test_delivered_sets_flags(self, admin, order):
        updated = set_status(admin.as_actor(), order.id, "delivered")
        assert updated.is_delivered is True

    def test_invalid_status(self, admin, order):
        with pytest.raises(ValidationError):
            set_status(admin.as_actor(), order.id, "teleported")

    def test_non_admin_rejected_before_status_check(self, customer, order):
        with pytest.raises(Forbidden):
            set_status(customer.as_actor(), order.id, "teleported")

    def test_status_is_checked_before_existence(self, admin):
        with pytest.raises(ValidationError):
            set_status(admin.as_actor(), "order-missing", "teleported")

    def test_valid_status_on_unknown_order(self, admin):
        with pytest.raises(NotFound):
            set_status(admin.as_actor(), "order-missing", "shipped")


class TestCancel:
    def test_owner_cancels_pending(self, customer, order):
        assert cancel_order(customer.as_actor(), order.id).status == "cancelled"

    def test_admin_cancels_customer_order(self, admin, order):
        assert cancel_order(admin.as_actor(), order.id).status == "cancelled"

    def test_stranger_cannot_cancel(self, other_customer, order):
        with pytest.raises(Forbidden):
            cancel_order(other_customer.as_actor(), order.id)

    @pytest.mark.parametrize("status", ["shipped", "delivered"])
    def test_cannot_cancel_after_shipping(self, admin, customer, order, status):
        set_status(admin.as_actor(), order.id, status)
        with pytest.raises(InvalidState):
            cancel_order(customer.as_actor(), order.id)
        assert current_domain.repository_for(Order).get(order.id).status == status

    def test_paid_order_can_be_cancelled(self, customer, order):
        mark_paid(customer.as_actor(), order.id)
        assert cancel_order(customer.as_actor(), order.id).status == "cancelled"

    def test_unknown_order(self, customer):
        with pytest.raises(NotFound):
            cancel_order(customer.as_actor(), "order-missing")


class TestGetOrder:
    def test_owner_and_admin_can_read(self, customer, admin, order):
        assert str(get_order(customer.as_actor(), order.id).id) == str(order.id)
        assert str(get_order(admin.as_actor(), order.id).id) == str(order.id)

    def test_stranger_cannot_read(self, other_customer, order):
        with pytest.raises(Forbidden):
            get_order(other_customer.as_actor(), order.id)

    def test_not_found_before_forbidden(self, other_customer):
        with pytest.raises(NotFound):
            get_order(other_customer.as_actor(), "order-missing")


class TestEndToEnd:
    def test_order_walks_through_its_lifecycle(self, customer, admin, order):
        actor = customer.as_actor()

        paid = mark_paid(actor, order.id, {"id": "pay-9"})
        assert (paid.status, paid.is_paid) == ("processing", True)

        with pytest.raises(Forbidden):
            mark_delivered(actor, order.id)

        delivered = mark_delivered(admin.as_actor(), order.id)
        assert (delivered.status, delivered.is_delivered) == ("delivered", True)

        with pytest.raises(InvalidState):
            cancel_order(actor, order.id)
