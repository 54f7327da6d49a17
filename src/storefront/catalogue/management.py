"""Catalogue administration: create, update and delete products."""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.lookup import require_product
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=100)
    description = String(required=True, max_length=500)
    price = Float(required=True, min_value=0.0)
    original_price = Float(min_value=0.0)
    category = String(max_length=50)
    brand = String(max_length=50)
    image = String(max_length=500)
    in_stock = Boolean()
    quantity = Integer(min_value=0)
    rating = Float(min_value=0.0, max_value=5.0)
    reviews = Integer(min_value=0)
    featured = Boolean()
    tags = Text()  # JSON array
    specifications = Text()  # JSON object


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(max_length=100)
    description = String(max_length=500)
    price = Float(min_value=0.0)
    original_price = Float(min_value=0.0)
    category = String(max_length=50)
    brand = String(max_length=50)
    image = String(max_length=500)
    in_stock = Boolean()
    quantity = Integer(min_value=0)
    rating = Float(min_value=0.0, max_value=5.0)
    reviews = Integer(min_value=0)
    featured = Boolean()
    tags = Text()
    specifications = Text()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


_OPTIONAL_ATTRIBUTES = (
    "original_price",
    "category",
    "brand",
    "image",
    "in_stock",
    "quantity",
    "rating",
    "reviews",
    "featured",
)


def _decode(raw):
    return json.loads(raw) if raw else None


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        attributes = {
            name: getattr(command, name) for name in _OPTIONAL_ATTRIBUTES if getattr(command, name) is not None
        }
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            tags=_decode(command.tags),
            specifications=_decode(command.specifications),
            **attributes,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), category=product.category)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = require_product(command.product_id)
        product.update_details(
            **{name: getattr(command, name) for name in _OPTIONAL_ATTRIBUTES},
            name=command.name,
            description=command.description,
            price=command.price,
            tags=_decode(command.tags),
            specifications=_decode(command.specifications),
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = require_product(command.product_id)
        repo._dao.delete(product)
        logger.info("Product deleted", product_id=str(command.product_id))
