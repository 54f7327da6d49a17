"""Translate domain exceptions into the error envelope."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.errors import StorefrontError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def error_body(message: str, errors=None) -> dict:
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body


def _validation_messages(exc: ValidationError) -> dict:
    messages = getattr(exc, "messages", None)
    return dict(messages) if isinstance(messages, dict) else {"_entity": [str(exc)]}


def _first_message(errors: dict) -> str:
    for field_messages in errors.values():
        if isinstance(field_messages, list | tuple) and field_messages:
            return str(field_messages[0])
        if field_messages:
            return str(field_messages)
    return "Validation failed"


async def handle_storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
    logger.info("Request rejected", error=type(exc).__name__, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    errors = _validation_messages(exc)
    logger.info("Validation failed", errors=errors)
    return JSONResponse(status_code=400, content=error_body(_first_message(errors), errors))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content=error_body("Validation failed", errors))


async def handle_object_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=error_body("Resource not found"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, handle_storefront_error)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, handle_object_not_found)
