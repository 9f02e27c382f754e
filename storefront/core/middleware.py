"""
Middleware configuration for the FastAPI application.

- CORS, restricted to the storefront origins
- Request logging with request id and processing time
"""

import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from storefront.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


def configure_cors_middleware(app: FastAPI) -> None:
    """
    Allow cross-origin calls from the storefront front end.

    Args:
        app: FastAPI instance
    """
    allowed_origins = settings.allowed_origins or ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
        expose_headers=["X-Process-Time", "X-Request-ID"],
    )

    logger.debug(f"CORS configured - allowed origins: {allowed_origins}")


def configure_request_logging_middleware(app: FastAPI) -> None:
    """
    Log every request/response pair.

    Args:
        app: FastAPI instance
    """

    @app.middleware("http")
    async def log_requests_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        start_time = time.time()

        logger.info(f"[{request_id}] {request.method} {request.url.path} - Client: {get_client_ip(request)}")
        if request.url.query:
            logger.debug(f"[{request_id}] Query params: {request.url.query}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} - Error: {str(e)} - Time: {process_time:.3f}s"
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            f"[{request_id}] {request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.3f}s"
        )

        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        response.headers["X-Request-ID"] = request_id
        return response


def configure_all_middleware(app: FastAPI) -> None:
    """
    Configure all middleware. They run in reverse order of registration.

    Args:
        app: FastAPI instance
    """
    configure_request_logging_middleware(app)

    # Added last so it runs first for preflight requests
    configure_cors_middleware(app)


def generate_request_id() -> str:
    """
    Short unique id for a request.

    Returns:
        str: 8 character id
    """
    return str(uuid.uuid4())[:8]


def get_client_ip(request: Request) -> str:
    """
    Client IP, taking proxies into account.

    Args:
        request: FastAPI request

    Returns:
        str: Client IP
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"
