"""User queries beyond plain lookup by identity."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.domain import storefront
from storefront.errors import NotFound


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        if not email:
            return None
        return self._dao.query.filter(email=email.strip().lower()).limit(1).all().first

    def list_users(self, offset=0, limit=20):
        return self._dao.query.order_by("-created_at").offset(offset).limit(limit).all()


def find_user(user_id) -> User | None:
    if not user_id:
        return None
    try:
        return current_domain.repository_for(User).get(str(user_id))
    except ObjectNotFoundError:
        return None


def require_user(user_id) -> User:
    user = find_user(user_id)
    if user is None:
        raise NotFound("User not found")
    return user
