"""Application settings read from the environment.

Values are read on every access so tests (and long-running shells) can change
them through ``os.environ`` without reloading modules.
"""

import os


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


class Settings:
    @property
    def jwt_secret(self) -> str:
        return os.getenv("JWT_SECRET", "storefront-development-jwt-secret-change-me")

    @property
    def jwt_algorithm(self) -> str:
        return "HS256"

    @property
    def jwt_expire_days(self) -> int:
        return _int_env("JWT_EXPIRE_DAYS", 30)

    @property
    def bcrypt_rounds(self) -> int:
        return _int_env("BCRYPT_ROUNDS", 12)

    @property
    def orders_page_limit_max(self) -> int:
        return _int_env("ORDERS_PAGE_LIMIT_MAX", 50)

    @property
    def admin_orders_page_limit_max(self) -> int:
        return _int_env("ADMIN_ORDERS_PAGE_LIMIT_MAX", 100)

    @property
    def products_page_limit_max(self) -> int:
        return _int_env("PRODUCTS_PAGE_LIMIT_MAX", 100)

    @property
    def users_page_limit_max(self) -> int:
        return _int_env("USERS_PAGE_LIMIT_MAX", 100)

    @property
    def cors_origins(self) -> list[str]:
        raw = os.getenv("CORS_ORIGINS", "*")
        return [origin.strip() for origin in raw.split(",") if origin.strip()]


settings = Settings()
