"""Order cancellation by its owner or an administrator."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.account.user import Actor, Role
from storefront.domain import storefront
from storefront.ordering.access import actor_of, ensure_can_access
from storefront.ordering.order import Order
from storefront.ordering.queries import load_order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(choices=Role, default=Role.USER.value)


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = load_order(command.order_id)
        ensure_can_access(actor_of(command), order)

        order.cancel(cancelled_by=command.actor_id)
        current_domain.repository_for(Order).add(order)

        logger.info("Order cancelled", order_id=str(order.id), cancelled_by=str(command.actor_id))


def cancel_order(actor: Actor, order_id) -> Order:
    current_domain.process(
        CancelOrder(order_id=str(order_id), actor_id=actor.user_id, actor_role=actor.role),
        asynchronous=False,
    )
    return load_order(order_id)
