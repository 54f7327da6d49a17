"""Who may see and act on an order.

Viewing and cancelling are open to the order's owner and to administrators.
Paying is open to the owner alone: administrators cannot pay on a customer's
behalf.
"""

from storefront.account.user import Actor, Role
from storefront.errors import Forbidden
from storefront.ordering.order import Order


def is_order_owner(actor: Actor, order: Order) -> bool:
    return str(order.user_id) == str(actor.user_id)


def can_access_order(actor: Actor, order: Order) -> bool:
    return is_order_owner(actor, order) or actor.is_admin


def ensure_can_access(actor: Actor, order: Order) -> None:
    if not can_access_order(actor, order):
        raise Forbidden("Not authorized to access this order")


def ensure_owner(actor: Actor, order: Order) -> None:
    if not is_order_owner(actor, order):
        raise Forbidden("Not authorized to pay for this order")


def ensure_admin(actor: Actor) -> None:
    if not actor.is_admin:
        raise Forbidden("Not authorized as an admin")


def actor_of(command) -> Actor:
    return Actor(user_id=str(command.actor_id), role=command.actor_role or Role.USER.value)
