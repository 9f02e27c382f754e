"""
Router registration for the FastAPI application.
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

from storefront.api.v1.dependencies import get_optional_squarespace_client
from storefront.api.v1.endpoints.inventory import router as inventory_router
from storefront.api.v1.endpoints.orders import router as orders_router
from storefront.api.v1.endpoints.products import router as products_router
from storefront.api.v1.schemas.api_schemas import HealthResponse, RootResponse
from storefront.core.config import get_settings
from storefront.core.health import get_health_status
from storefront.db.squarespace_client import SquarespaceClient

settings = get_settings()
logger = logging.getLogger(__name__)

API_V1_PREFIX = "/api/v1"


async def health(client: Optional[SquarespaceClient] = Depends(get_optional_squarespace_client)) -> JSONResponse:
    """
    Health report of the API and its Squarespace dependency.

    Returns 503 when unhealthy; degraded still answers 200.
    """
    report = await get_health_status(client, settings)
    status_code = 503 if report.status == "unhealthy" else 200
    return JSONResponse(status_code=status_code, content=report.model_dump(mode="json", exclude_none=True))


def create_root_endpoints(app: FastAPI) -> None:
    """
    Root endpoints of the application.

    Args:
        app: FastAPI instance
    """

    @app.get("/", tags=["Root"], summary="API Info", response_model=RootResponse)
    async def root():
        return RootResponse(
            message=settings.APP_NAME,
            version=settings.APP_VERSION,
            status="healthy",
            endpoints={
                "health": "/health",
                "products": f"{API_V1_PREFIX}/products",
                "orders": f"{API_V1_PREFIX}/orders",
                "inventory": f"{API_V1_PREFIX}/inventory",
                "profiles": f"{API_V1_PREFIX}/profiles",
            },
        )


def create_health_endpoints(app: FastAPI) -> None:
    """
    Health endpoints, at the root and under the API prefix.

    Args:
        app: FastAPI instance
    """
    for path in ("/health", f"{API_V1_PREFIX}/health"):
        app.add_api_route(
            path,
            health,
            methods=["GET"],
            tags=["Health"],
            summary="Health Check",
            response_model=HealthResponse,
        )


def configure_api_v1_routers(app: FastAPI) -> None:
    """
    Register the v1 API routers.

    Args:
        app: FastAPI instance
    """
    app.include_router(products_router, prefix=API_V1_PREFIX)
    app.include_router(orders_router, prefix=API_V1_PREFIX)
    app.include_router(inventory_router, prefix=API_V1_PREFIX)


def configure_all_routers(app: FastAPI) -> None:
    """
    Configure every router and endpoint of the application.

    Args:
        app: FastAPI instance
    """
    create_root_endpoints(app)
    create_health_endpoints(app)
    configure_api_v1_routers(app)

    logger.debug(f"Routers configured ({len(app.routes)} routes)")
