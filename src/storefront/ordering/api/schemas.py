"""Pydantic request schemas for the Ordering API.

These are the external contract. Handlers receive Protean commands built from
them, never the schemas themselves.
"""

from typing import Any

from pydantic import BaseModel, Field

from storefront.ordering.order import PaymentMethod


class ShippingAddressSchema(BaseModel):
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    country: str = Field(min_length=1)


class OrderLineSchema(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)


class CreateOrderRequest(BaseModel):
    items: list[OrderLineSchema] = Field(min_length=1)
    shipping_address: ShippingAddressSchema
    payment_method: PaymentMethod
    items_price: float = 0.0
    tax_price: float = 0.0
    shipping_price: float = 0.0
    total_price: float = 0.0

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": "prod-001", "quantity": 2}],
                    "shipping_address": {
                        "street": "1 Main St",
                        "city": "Springfield",
                        "state": "IL",
                        "zip_code": "62701",
                        "country": "US",
                    },
                    "payment_method": "card",
                    "items_price": 20.0,
                    "tax_price": 2.0,
                    "shipping_price": 5.0,
                    "total_price": 27.0,
                }
            ]
        }
    }


class PayOrderRequest(BaseModel):
    payment_result: dict[str, Any] | None = None


class SetStatusRequest(BaseModel):
    # Checked by the handler, after the role and existence checks.
    status: str
