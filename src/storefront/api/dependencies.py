"""FastAPI dependencies that turn a bearer token into the acting user."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.account.auth import decode_token
from storefront.account.repository import find_user
from storefront.account.user import Actor, User
from storefront.errors import Forbidden, Unauthenticated
from storefront.utils.logging import add_context

bearer_scheme = HTTPBearer(auto_error=False)


async def current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Not authorized, no token")

    user_id = decode_token(credentials.credentials)
    user = find_user(user_id)
    if user is None:
        raise Unauthenticated("Not authorized, user not found")

    add_context(user_id=str(user.id))
    return user


async def current_actor(user: User = Depends(current_user)) -> Actor:
    return user.as_actor()


async def admin_actor(actor: Actor = Depends(current_actor)) -> Actor:
    if not actor.is_admin:
        raise Forbidden("Not authorized as an admin")
    return actor
