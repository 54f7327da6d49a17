"""Recording payment against an order."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.account.user import Actor, Role
from storefront.domain import storefront
from storefront.ordering.access import actor_of, ensure_owner
from storefront.ordering.order import Order
from storefront.ordering.queries import load_order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class MarkOrderPaid:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(choices=Role, default=Role.USER.value)
    payment_result = Text()  # JSON object from the payment provider


@storefront.command_handler(part_of=Order)
class OrderPaymentHandler:
    @handle(MarkOrderPaid)
    def mark_paid(self, command):
        order = load_order(command.order_id)
        ensure_owner(actor_of(command), order)

        payment_result = json.loads(command.payment_result) if command.payment_result else {}
        order.mark_paid(payment_result=payment_result)
        current_domain.repository_for(Order).add(order)

        logger.info("Order paid", order_id=str(order.id), user_id=str(order.user_id))


def mark_paid(actor: Actor, order_id, payment_result: dict | None = None) -> Order:
    current_domain.process(
        MarkOrderPaid(
            order_id=str(order_id),
            actor_id=actor.user_id,
            actor_role=actor.role,
            payment_result=json.dumps(payment_result or {}),
        ),
        asynchronous=False,
    )
    return load_order(order_id)
