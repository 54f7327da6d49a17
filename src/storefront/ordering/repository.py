"""Order listings, newest first."""

from storefront.domain import storefront
from storefront.ordering.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id, offset=0, limit=10):
        return (
            self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").offset(offset).limit(limit).all()
        )

    def all_orders(self, status=None, offset=0, limit=20):
        query = self._dao.query
        if status:
            query = query.filter(status=status)
        return query.order_by("-created_at").offset(offset).limit(limit).all()
