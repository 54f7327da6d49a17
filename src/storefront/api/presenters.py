"""JSON shapes returned by the API, and the success envelope around them."""

from datetime import datetime

from storefront.account.cart import populated_cart
from storefront.account.user import User
from storefront.account.wishlist import populated_wishlist
from storefront.catalogue.product import Product
from storefront.ordering.order import Order
from storefront.utils.pagination import total_pages


def _timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def envelope(data=None, message: str | None = None, **extra) -> dict:
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return body


def paginated(items: list, total: int, page: int, limit: int, **extra) -> dict:
    return envelope(
        data=items,
        count=len(items),
        total=total,
        totalPages=total_pages(total, limit),
        currentPage=page,
        **extra,
    )


def product_data(product: Product) -> dict:
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "original_price": product.original_price,
        "discount_percentage": product.discount_percentage,
        "category": product.category,
        "brand": product.brand,
        "image": product.image,
        "in_stock": product.in_stock,
        "quantity": product.quantity,
        "rating": product.rating,
        "reviews": product.reviews,
        "featured": product.featured,
        "tags": product.tag_list,
        "specifications": product.specification_map,
        "created_at": _timestamp(product.created_at),
        "updated_at": _timestamp(product.updated_at),
    }


def cart_data(user: User) -> list[dict]:
    return [
        {"product": product_data(product), "quantity": item.quantity, "added_at": _timestamp(item.added_at)}
        for item, product in populated_cart(user)
    ]


def wishlist_data(user: User) -> list[dict]:
    return [product_data(product) for product in populated_wishlist(user)]


def user_data(user: User, include_collections: bool = False) -> dict:
    data = {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "avatar": user.avatar,
        "last_login_at": _timestamp(user.last_login_at),
        "created_at": _timestamp(user.created_at),
    }
    if include_collections:
        data["cart"] = cart_data(user)
        data["wishlist"] = wishlist_data(user)
    return data


def order_data(order: Order) -> dict:
    address = order.shipping_address
    pricing = order.pricing
    return {
        "id": str(order.id),
        "user_id": str(order.user_id),
        "items": [
            {
                "product_id": str(item.product_id),
                "name": item.name,
                "image": item.image,
                "price": item.price,
                "quantity": item.quantity,
            }
            for item in order.items
        ],
        "shipping_address": {
            "street": address.street,
            "city": address.city,
            "state": address.state,
            "zip_code": address.zip_code,
            "country": address.country,
        }
        if address
        else None,
        "payment_method": order.payment_method,
        "items_price": pricing.items_price if pricing else 0.0,
        "tax_price": pricing.tax_price if pricing else 0.0,
        "shipping_price": pricing.shipping_price if pricing else 0.0,
        "total_price": pricing.total_price if pricing else 0.0,
        "is_paid": order.is_paid,
        "paid_at": _timestamp(order.paid_at),
        "payment_result": order.payment_receipt,
        "is_delivered": order.is_delivered,
        "delivered_at": _timestamp(order.delivered_at),
        "status": order.status,
        "created_at": _timestamp(order.created_at),
        "updated_at": _timestamp(order.updated_at),
    }
