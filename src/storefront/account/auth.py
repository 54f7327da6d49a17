"""Credential handling: bcrypt password hashes and HS256 bearer tokens."""

from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from storefront.config import settings
from storefront.errors import Unauthenticated
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def issue_token(user_id) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expire_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> str:
    """Return the user id carried by ``token``.

    Raises ``Unauthenticated`` for malformed, tampered or expired tokens.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Not authorized, token expired") from None
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected bearer token", error=str(exc))
        raise Unauthenticated("Not authorized, token failed") from None

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthenticated("Not authorized, token failed")
    return user_id
