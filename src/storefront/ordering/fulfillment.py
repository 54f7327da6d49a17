"""Administrative fulfilment: marking delivery and setting status directly."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.account.user import Actor, Role
from storefront.domain import storefront
from storefront.ordering.access import actor_of, ensure_admin
from storefront.ordering.order import Order, parse_status
from storefront.ordering.queries import load_order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class MarkOrderDelivered:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(choices=Role, default=Role.USER.value)


@storefront.command(part_of="Order")
class SetOrderStatus:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(choices=Role, default=Role.USER.value)
    status = String(required=True, max_length=20)


@storefront.command_handler(part_of=Order)
class OrderFulfillmentHandler:
    @handle(MarkOrderDelivered)
    def mark_delivered(self, command):
        # Role is checked before the order is even looked up.
        ensure_admin(actor_of(command))
        order = load_order(command.order_id)

        order.mark_delivered()
        current_domain.repository_for(Order).add(order)

        logger.info("Order delivered", order_id=str(order.id), was_paid=bool(order.is_paid))

    @handle(SetOrderStatus)
    def set_status(self, command):
        ensure_admin(actor_of(command))
        parse_status(command.status)
        order = load_order(command.order_id)

        previous = order.status
        order.set_status(command.status)
        current_domain.repository_for(Order).add(order)

        logger.info("Order status changed", order_id=str(order.id), previous=previous, status=order.status)


def mark_delivered(actor: Actor, order_id) -> Order:
    current_domain.process(
        MarkOrderDelivered(order_id=str(order_id), actor_id=actor.user_id, actor_role=actor.role),
        asynchronous=False,
    )
    return load_order(order_id)


def set_status(actor: Actor, order_id, status: str) -> Order:
    current_domain.process(
        SetOrderStatus(order_id=str(order_id), actor_id=actor.user_id, actor_role=actor.role, status=status),
        asynchronous=False,
    )
    return load_order(order_id)
