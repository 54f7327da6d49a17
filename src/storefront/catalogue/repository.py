"""Catalogue queries beyond plain lookup by identity."""

from protean.exceptions import ValidationError

from storefront.catalogue.product import Product, ProductCategory
from storefront.domain import storefront

SORTABLE_FIELDS = ("name", "price", "rating", "created_at")
DEFAULT_SORT = "-created_at"


def _sort_expression(sort: str | None) -> str:
    sort = sort or DEFAULT_SORT
    if sort.lstrip("-") not in SORTABLE_FIELDS:
        raise ValidationError({"sort": [f"Cannot sort by '{sort}'"]})
    return sort


@storefront.repository(part_of=Product)
class ProductRepository:
    def search(
        self,
        category=None,
        min_price=None,
        max_price=None,
        featured=None,
        in_stock=None,
        name=None,
        sort=None,
        offset=0,
        limit=10,
    ):
        """Filter, sort and page the catalogue. Returns a Protean ``ResultSet``."""
        criteria = {}
        if category:
            if category not in [c.value for c in ProductCategory]:
                raise ValidationError({"category": [f"Unknown category '{category}'"]})
            criteria["category"] = category
        if min_price is not None:
            criteria["price__gte"] = float(min_price)
        if max_price is not None:
            criteria["price__lte"] = float(max_price)
        if featured is not None:
            criteria["featured"] = featured
        if in_stock is not None:
            criteria["in_stock"] = in_stock
        if name:
            criteria["name__icontains"] = name

        query = self._dao.query
        if criteria:
            query = query.filter(**criteria)

        return query.order_by(_sort_expression(sort)).offset(offset).limit(limit).all()

    def categories(self) -> list[str]:
        """Categories that currently have at least one product, in declaration order."""
        present = []
        for category in ProductCategory:
            if self._dao.query.filter(category=category.value).limit(1).all().total > 0:
                present.append(category.value)
        return present
