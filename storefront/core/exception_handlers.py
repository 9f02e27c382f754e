"""
Exception handlers of the FastAPI application.

Every error response uses the API envelope: ``{"error": {"type", "message",
...}}`` plus request context.
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.config import get_settings
from storefront.utils.error_handler import (
    AppException,
    SquarespaceAPIException,
    ValidationException,
)

settings = get_settings()
logger = logging.getLogger(__name__)

# Status used when Squarespace could not be reached at all
UPSTREAM_UNAVAILABLE_STATUS = 502


def _error_content(request: Request, error_type: str, message: str, **extra: Any) -> Dict[str, Any]:
    return {
        "error": {"type": error_type, "message": message, **extra},
        "path": str(request.url.path),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request.headers.get("X-Request-ID"),
    }


async def squarespace_api_exception_handler(request: Request, exc: SquarespaceAPIException) -> JSONResponse:
    """
    Handler for Squarespace failures.

    Vendor statuses are passed through; transport failures (status 0) become 502.

    Args:
        request: FastAPI request
        exc: Normalized Squarespace error

    Returns:
        JSONResponse: Error envelope
    """
    logger.error(
        f"Squarespace API Exception: {exc.message} - "
        f"Code: {exc.error_code.value} - "
        f"Status: {exc.status_code} - "
        f"Endpoint: {exc.endpoint} - "
        f"URL: {request.url}"
    )

    status_code = exc.status_code if exc.status_code >= 400 else UPSTREAM_UNAVAILABLE_STATUS
    error_type = "network_error" if exc.is_network_error else "api_error"

    return JSONResponse(
        status_code=status_code,
        content=_error_content(
            request,
            error_type,
            exc.message,
            code=exc.error_code.value,
            upstream_status=exc.status_code,
            details=exc.details if settings.DEBUG else None,
        ),
    )


async def validation_exception_handler(request: Request, exc: ValidationException) -> JSONResponse:
    logger.warning(f"Validation Exception: {exc.message} - Field: {exc.field} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(request, "validation_error", exc.message, code=exc.error_code.value, field=exc.field),
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handler for request bodies and parameters FastAPI could not parse.

    Answers 400, the same status as the explicit validation errors.
    """
    errors = [{key: value for key, value in error.items() if key != "ctx"} for error in exc.errors()]
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"Invalid request data: {location} {first.get('msg', '')}".strip()

    logger.warning(f"Request Validation Error: {message} - URL: {request.url}")

    return JSONResponse(
        status_code=400,
        content=_error_content(request, "invalid_request", message, errors=jsonable_encoder(errors)),
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handler for the remaining application exceptions (configuration errors...).
    """
    logger.error(
        f"App Exception: {exc.message} - "
        f"Code: {exc.error_code.value} - "
        f"URL: {request.url} - "
        f"Details: {exc.details}"
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(request, exc.error_code.value.lower(), exc.message, code=exc.error_code.value),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(f"HTTP Exception: {exc.status_code} - {exc.detail} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(request, "http_error", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler for uncaught exceptions. Internal details are only exposed in DEBUG.
    """
    logger.error(
        f"Unhandled Exception: {str(exc)} - "
        f"Type: {type(exc).__name__} - "
        f"URL: {request.url} - "
        f"Traceback: {traceback.format_exc()}"
    )

    error_message = "Internal server error occurred"
    if settings.DEBUG:
        error_message = f"{type(exc).__name__}: {str(exc)}"

    return JSONResponse(status_code=500, content=_error_content(request, "internal_error", error_message))


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Register every exception handler of the application.

    Args:
        app: FastAPI instance
    """
    app.add_exception_handler(SquarespaceAPIException, squarespace_api_exception_handler)
    app.add_exception_handler(ValidationException, validation_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Must be last
    app.add_exception_handler(Exception, global_exception_handler)

    logger.debug("Exception handlers configured")
