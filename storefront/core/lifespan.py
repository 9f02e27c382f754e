"""
Lifecycle of the FastAPI application.

Startup configures logging and builds the one Squarespace client the
endpoints share; shutdown closes it.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from storefront.core.config import get_settings, resolve_squarespace_config
from storefront.core.logging_config import setup_logging
from storefront.db.squarespace_client import SquarespaceClient
from storefront.utils.error_handler import ConfigurationException

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan.

    Args:
        app: FastAPI instance
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")

    app.state.squarespace_client = startup_create_client()

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    client = getattr(app.state, "squarespace_client", None)
    if client is not None:
        await client.close()
        app.state.squarespace_client = None


def startup_create_client():
    """
    Build the Squarespace client from the environment.

    A missing site id does not stop the API: health reports the problem and
    Squarespace-backed endpoints answer with a configuration error.
    """
    config = resolve_squarespace_config()

    try:
        client = SquarespaceClient(config)
    except ConfigurationException as e:
        logger.error(f"Squarespace client not created: {e.message}")
        return None

    if not config.has_credentials:
        logger.warning("No SQUARESPACE_ACCESS_TOKEN or SQUARESPACE_API_KEY configured; requests will be rejected")

    return client
