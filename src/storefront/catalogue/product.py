"""Product aggregate: the catalogue entries that carts, wishlists and orders reference."""

import json
import math
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from storefront.catalogue.events import ProductCreated, ProductUpdated
from storefront.domain import storefront

PLACEHOLDER_IMAGE = "https://via.placeholder.com/300x200?text=Product+Image"

# Attributes an administrator may change after creation.
_EDITABLE_FIELDS = (
    "name",
    "description",
    "price",
    "original_price",
    "category",
    "brand",
    "image",
    "in_stock",
    "quantity",
    "rating",
    "reviews",
    "featured",
    "tags",
    "specifications",
)


class ProductCategory(Enum):
    ELECTRONICS = "Electronics"
    ACCESSORIES = "Accessories"
    CLOTHING = "Clothing"
    BOOKS = "Books"
    HOME = "Home"
    SPORTS = "Sports"
    OTHER = "Other"


@storefront.aggregate
class Product:
    name = String(required=True, max_length=100)
    description = String(required=True, max_length=500)
    price = Float(required=True, min_value=0.0)
    original_price = Float(min_value=0.0)
    category = String(choices=ProductCategory, default=ProductCategory.OTHER.value)
    brand = String(max_length=50)
    image = String(max_length=500, default=PLACEHOLDER_IMAGE)
    in_stock = Boolean(default=True)
    quantity = Integer(default=0, min_value=0)
    rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    reviews = Integer(default=0, min_value=0)
    featured = Boolean(default=False)
    tags = Text()  # JSON array of strings
    specifications = Text()  # JSON object of name -> value
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def tags_must_be_a_list_of_strings(self):
        if not self.tags:
            return

        try:
            tags = json.loads(self.tags)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"tags": ["Tags must be valid JSON"]}) from None

        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise ValidationError({"tags": ["Tags must be a list of strings"]})

    @invariant.post
    def specifications_must_map_strings_to_strings(self):
        if not self.specifications:
            return

        try:
            specs = json.loads(self.specifications)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"specifications": ["Specifications must be valid JSON"]}) from None

        if not isinstance(specs, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in specs.items()
        ):
            raise ValidationError({"specifications": ["Specifications must map names to string values"]})

    @classmethod
    def create(cls, name, description, price, **attributes):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=price,
            tags=json.dumps(attributes.pop("tags", None) or []),
            specifications=json.dumps(attributes.pop("specifications", None) or {}),
            created_at=now,
            updated_at=now,
            **attributes,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=product.name,
                category=product.category,
                price=product.price,
                created_at=now,
            )
        )
        return product

    def update_details(self, **changes):
        """Apply the given attribute changes. ``None`` values are ignored."""
        changed = []
        for field_name, value in changes.items():
            if field_name not in _EDITABLE_FIELDS:
                raise ValidationError({field_name: ["Field cannot be updated"]})
            if value is None:
                continue
            if field_name in ("tags", "specifications"):
                value = json.dumps(value)
            setattr(self, field_name, value)
            changed.append(field_name)

        if not changed:
            return

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                changed_fields=json.dumps(changed),
                updated_at=now,
            )
        )

    @property
    def discount_percentage(self) -> int:
        """Percentage saved against ``original_price``; 0 when there is no markdown."""
        if self.original_price and self.original_price > self.price:
            return math.floor((self.original_price - self.price) / self.original_price * 100 + 0.5)
        return 0

    @property
    def tag_list(self) -> list[str]:
        return json.loads(self.tags) if self.tags else []

    @property
    def specification_map(self) -> dict[str, str]:
        return json.loads(self.specifications) if self.specifications else {}
