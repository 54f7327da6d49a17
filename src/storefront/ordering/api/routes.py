"""FastAPI routes for orders.

Role and ownership checks happen inside the command handlers; the routes only
establish who is asking.
"""

from fastapi import APIRouter, Body, Depends, Query

from storefront.account.user import Actor
from storefront.api.dependencies import admin_actor, current_actor
from storefront.api.presenters import envelope, order_data, paginated
from storefront.ordering import queries
from storefront.ordering.api.schemas import CreateOrderRequest, PayOrderRequest, SetStatusRequest
from storefront.ordering.cancellation import cancel_order
from storefront.ordering.creation import place_order
from storefront.ordering.fulfillment import mark_delivered, set_status
from storefront.ordering.payment import mark_paid

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", status_code=201)
async def create_order(body: CreateOrderRequest, actor: Actor = Depends(current_actor)):
    order = place_order(
        actor,
        items=[line.model_dump() for line in body.items],
        shipping_address=body.shipping_address.model_dump(),
        payment_method=body.payment_method.value,
        pricing={
            "items_price": body.items_price,
            "tax_price": body.tax_price,
            "shipping_price": body.shipping_price,
            "total_price": body.total_price,
        },
    )
    return envelope(data=order_data(order), message="Order created successfully")


@router.get("/myorders")
async def my_orders(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    actor: Actor = Depends(current_actor),
):
    result = queries.list_own_orders(actor, page=page, limit=limit)
    return paginated([order_data(o) for o in result.orders], result.total, result.page, result.limit)


@router.get("")
async def all_orders(
    status: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    actor: Actor = Depends(admin_actor),
):
    result = queries.list_all_orders(status=status, page=page, limit=limit)
    return paginated([order_data(o) for o in result.orders], result.total, result.page, result.limit)


@router.get("/{order_id}")
async def get_order(order_id: str, actor: Actor = Depends(current_actor)):
    return envelope(data=order_data(queries.get_order(actor, order_id)))


@router.put("/{order_id}/pay")
async def pay_order(
    order_id: str,
    body: PayOrderRequest | None = Body(default=None),
    actor: Actor = Depends(current_actor),
):
    order = mark_paid(actor, order_id, payment_result=body.payment_result if body else None)
    return envelope(data=order_data(order), message="Order marked as paid")


@router.put("/{order_id}/deliver")
async def deliver_order(order_id: str, actor: Actor = Depends(current_actor)):
    order = mark_delivered(actor, order_id)
    return envelope(data=order_data(order), message="Order marked as delivered")


@router.put("/{order_id}/status")
async def update_status(order_id: str, body: SetStatusRequest, actor: Actor = Depends(current_actor)):
    order = set_status(actor, order_id, body.status)
    return envelope(data=order_data(order), message="Order status updated")


@router.delete("/{order_id}")
async def cancel(order_id: str, actor: Actor = Depends(current_actor)):
    order = cancel_order(actor, order_id)
    return envelope(data=order_data(order), message="Order cancelled successfully")
