"""Pydantic request schemas for the Catalogue API."""

from pydantic import BaseModel, Field

from storefront.catalogue.product import ProductCategory


class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=500)
    price: float = Field(ge=0)
    original_price: float | None = Field(default=None, ge=0)
    category: ProductCategory = ProductCategory.OTHER
    brand: str | None = Field(default=None, max_length=50)
    image: str | None = Field(default=None, max_length=500)
    in_stock: bool | None = None
    quantity: int | None = Field(default=None, ge=0)
    rating: float | None = Field(default=None, ge=0, le=5)
    reviews: int | None = Field(default=None, ge=0)
    featured: bool | None = None
    tags: list[str] = Field(default_factory=list)
    specifications: dict[str, str] = Field(default_factory=dict)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wireless Headphones",
                    "description": "Over-ear, noise cancelling",
                    "price": 199.99,
                    "original_price": 249.99,
                    "category": "Electronics",
                    "brand": "AudioTech",
                    "tags": ["audio", "wireless"],
                    "specifications": {"Battery": "30 hours"},
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1, max_length=500)
    price: float | None = Field(default=None, ge=0)
    original_price: float | None = Field(default=None, ge=0)
    category: ProductCategory | None = None
    brand: str | None = Field(default=None, max_length=50)
    image: str | None = Field(default=None, max_length=500)
    in_stock: bool | None = None
    quantity: int | None = Field(default=None, ge=0)
    rating: float | None = Field(default=None, ge=0, le=5)
    reviews: int | None = Field(default=None, ge=0)
    featured: bool | None = None
    tags: list[str] | None = None
    specifications: dict[str, str] | None = None
