"""Account API package."""

from storefront.account.api.routes import router

__all__ = ["router"]
