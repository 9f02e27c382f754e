"""
FastAPI dependencies shared by the v1 endpoints.
"""

from typing import Optional

from fastapi import Depends, Request

from storefront.db.squarespace_client import SquarespaceClient
from storefront.utils.error_handler import ConfigurationException


def get_optional_squarespace_client(request: Request) -> Optional[SquarespaceClient]:
    """Client created at startup, or None when the site id was missing."""
    return getattr(request.app.state, "squarespace_client", None)


def get_squarespace_client(
    client: Optional[SquarespaceClient] = Depends(get_optional_squarespace_client),
) -> SquarespaceClient:
    """
    Return the client created at startup.

    Raises:
        ConfigurationException: If the application started without a usable client
    """
    if client is None:
        raise ConfigurationException(
            "Squarespace client is not configured (SQUARESPACE_SITE_ID missing?)",
            setting="SQUARESPACE_SITE_ID",
        )
    return client
