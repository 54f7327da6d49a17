"""Read side of the order lifecycle: single-order lookup and paged listings."""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.account.user import Actor
from storefront.config import settings
from storefront.errors import NotFound
from storefront.ordering.access import ensure_can_access
from storefront.ordering.order import Order, parse_status
from storefront.utils.pagination import clamp_limit, offset_for, total_pages

OWN_ORDERS_DEFAULT_LIMIT = 10
ALL_ORDERS_DEFAULT_LIMIT = 20


@dataclass
class OrderPage:
    orders: list[Order]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)


def load_order(order_id) -> Order:
    """Fetch an order or raise ``NotFound``. No access check."""
    if not order_id:
        raise NotFound("Order not found")
    try:
        return current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        raise NotFound("Order not found") from None


def get_order(actor: Actor, order_id) -> Order:
    order = load_order(order_id)
    ensure_can_access(actor, order)
    return order


def list_own_orders(actor: Actor, page: int = 1, limit: int | None = None) -> OrderPage:
    limit = clamp_limit(limit, OWN_ORDERS_DEFAULT_LIMIT, settings.orders_page_limit_max)
    results = current_domain.repository_for(Order).for_user(
        actor.user_id, offset=offset_for(page, limit), limit=limit
    )
    return OrderPage(orders=list(results.items), total=results.total, page=page, limit=limit)


def list_all_orders(status: str | None = None, page: int = 1, limit: int | None = None) -> OrderPage:
    if status:
        parse_status(status)

    limit = clamp_limit(limit, ALL_ORDERS_DEFAULT_LIMIT, settings.admin_orders_page_limit_max)
    results = current_domain.repository_for(Order).all_orders(
        status=status, offset=offset_for(page, limit), limit=limit
    )
    return OrderPage(orders=list(results.items), total=results.total, page=page, limit=limit)


def list_orders(actor: Actor, status: str | None = None, page: int = 1, limit: int | None = None) -> OrderPage:
    """Administrators see every order; everyone else sees only their own."""
    if actor.is_admin:
        return list_all_orders(status=status, page=page, limit=limit)
    return list_own_orders(actor, page=page, limit=limit)
