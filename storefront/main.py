"""
Store.AdrienBird.net API - FastAPI application entry point.

Exposes the Squarespace catalog, orders, inventory and customer profiles to
the storefront front end.
"""

import logging

import uvicorn
from fastapi import FastAPI

from storefront.core.config import get_settings
from storefront.core.exception_handlers import configure_exception_handlers
from storefront.core.lifespan import lifespan
from storefront.core.middleware import configure_all_middleware
from storefront.core.routers import configure_all_routers

settings = get_settings()
logger = logging.getLogger(__name__)


def create_application() -> FastAPI:
    """
    Factory building the configured FastAPI application.

    Returns:
        FastAPI: Configured application
    """
    docs_enabled = settings.DEBUG or settings.ENABLE_DOCS

    app = FastAPI(
        title=settings.APP_NAME,
        description="Storefront API backed by the Squarespace Commerce API",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    # Order matters: middleware, exception handlers, routers
    configure_all_middleware(app)
    configure_exception_handlers(app)
    configure_all_routers(app)

    return app


app = create_application()


if __name__ == "__main__":
    uvicorn.run(
        "storefront.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
