"""FastAPI routes for the catalogue: public browsing and admin maintenance."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.account.user import Actor
from storefront.api.dependencies import admin_actor
from storefront.api.presenters import envelope, paginated, product_data
from storefront.catalogue.api.schemas import CreateProductRequest, UpdateProductRequest
from storefront.catalogue.lookup import require_product
from storefront.catalogue.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.config import settings
from storefront.utils.pagination import clamp_limit, offset_for

router = APIRouter(prefix="/api/products", tags=["products"])

DEFAULT_PAGE_LIMIT = 10


@router.get("")
async def list_products(
    category: str | None = None,
    min_price: float | None = Query(default=None, alias="minPrice", ge=0),
    max_price: float | None = Query(default=None, alias="maxPrice", ge=0),
    featured: bool | None = None,
    in_stock: bool | None = Query(default=None, alias="inStock"),
    search: str | None = None,
    sort: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
):
    limit = clamp_limit(limit, DEFAULT_PAGE_LIMIT, settings.products_page_limit_max)
    results = current_domain.repository_for(Product).search(
        category=category,
        min_price=min_price,
        max_price=max_price,
        featured=featured,
        in_stock=in_stock,
        name=search,
        sort=sort,
        offset=offset_for(page, limit),
        limit=limit,
    )
    return paginated([product_data(p) for p in results.items], results.total, page, limit)


@router.get("/categories/list")
async def list_categories():
    categories = current_domain.repository_for(Product).categories()
    return envelope(data=categories, count=len(categories))


@router.get("/{product_id}")
async def get_product(product_id: str):
    return envelope(data=product_data(require_product(product_id)))


@router.post("", status_code=201)
async def create_product(body: CreateProductRequest, actor: Actor = Depends(admin_actor)):
    product_id = current_domain.process(
        CreateProduct(
            **body.model_dump(exclude={"category", "tags", "specifications"}, exclude_none=True),
            category=body.category.value,
            tags=json.dumps(body.tags),
            specifications=json.dumps(body.specifications),
        ),
        asynchronous=False,
    )
    return envelope(data=product_data(require_product(product_id)), message="Product created successfully")


@router.put("/{product_id}")
async def update_product(product_id: str, body: UpdateProductRequest, actor: Actor = Depends(admin_actor)):
    changes = body.model_dump(exclude={"category", "tags", "specifications"}, exclude_none=True)
    current_domain.process(
        UpdateProduct(
            product_id=product_id,
            **changes,
            category=body.category.value if body.category else None,
            tags=json.dumps(body.tags) if body.tags is not None else None,
            specifications=json.dumps(body.specifications) if body.specifications is not None else None,
        ),
        asynchronous=False,
    )
    return envelope(data=product_data(require_product(product_id)), message="Product updated successfully")


@router.delete("/{product_id}")
async def delete_product(product_id: str, actor: Actor = Depends(admin_actor)):
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return envelope(message="Product deleted successfully")
