"""
Health checks.

Combines the Squarespace availability check with a check of the local
configuration into one report.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from storefront.api.v1.schemas.api_schemas import HealthCheck, HealthResponse
from storefront.core.config import Settings, SquarespaceConfig, get_settings, resolve_squarespace_config
from storefront.db.squarespace_client import SquarespaceClient

logger = logging.getLogger(__name__)


def check_configuration(config: SquarespaceConfig) -> HealthCheck:
    """
    Check the Squarespace settings.

    A missing site id is a warning, missing credentials are an error.
    """
    check = HealthCheck(status="healthy")

    if not config.site_id:
        check = HealthCheck(status="warning", message="SQUARESPACE_SITE_ID not configured")

    if not config.has_credentials:
        check = HealthCheck(status="error", message="No Squarespace authentication configured")

    return check


async def check_squarespace_api(client: Optional[SquarespaceClient]) -> HealthCheck:
    """
    Check the Squarespace API through the client.
    """
    if client is None:
        return HealthCheck(status="unhealthy", message="Squarespace client not initialized")

    start = time.monotonic()
    available = await client.health_check()
    latency_ms = round((time.monotonic() - start) * 1000, 2)

    if not available:
        return HealthCheck(status="unhealthy", message="Squarespace API unreachable", latency_ms=latency_ms)

    return HealthCheck(status="healthy", latency_ms=latency_ms)


async def get_health_status(
    client: Optional[SquarespaceClient],
    settings: Optional[Settings] = None,
) -> HealthResponse:
    """
    Build the health report.

    Returns:
        HealthResponse: ``unhealthy`` on configuration errors, ``degraded`` when
        the API is down or the configuration has warnings, else ``healthy``
    """
    settings = settings or get_settings()
    config = client.config if client is not None else resolve_squarespace_config(settings)

    api_check = await check_squarespace_api(client)
    config_check = check_configuration(config)

    overall = "healthy"
    if config_check.status == "error":
        overall = "unhealthy"
    elif api_check.status == "unhealthy" or config_check.status == "warning":
        overall = "degraded"

    if overall != "healthy":
        logger.warning(f"Health status {overall}: api={api_check.status}, configuration={config_check.status}")

    return HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        checks={"squarespace_api": api_check, "configuration": config_check},
    )
