"""Storefront FastAPI application.

Usage:
    uvicorn storefront.api.app:create_app --factory --host 0.0.0.0 --port 8000

PROTEAN_ENV selects the configuration overlay from ``domain.toml``.
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.account.api import router as account_router
from storefront.api.errors import register_exception_handlers
from storefront.catalogue.api import router as catalogue_router
from storefront.config import settings
from storefront.domain import storefront
from storefront.ordering.api import router as ordering_router
from storefront.utils.logging import add_context, clear_context, get_logger

logger = get_logger(__name__)


def build_app() -> FastAPI:
    """Assemble the app around an already initialized domain."""
    app = FastAPI(
        title="Storefront API",
        description="Catalogue, customer accounts, carts, wishlists and orders",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and bind request log context."""
        clear_context()
        add_context(
            request_id=request.headers.get("X-Request-ID") or str(uuid.uuid4()),
            method=request.method,
            path=request.url.path,
        )
        with storefront.domain_context():
            response = await call_next(request)
        logger.debug("Request handled", status_code=response.status_code)
        return response

    register_exception_handlers(app)

    app.include_router(account_router)
    app.include_router(catalogue_router)
    app.include_router(ordering_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app


def create_app() -> FastAPI:
    """Initialize the domain and build the app. Entry point for uvicorn ``--factory``."""
    storefront.init()
    return build_app()
