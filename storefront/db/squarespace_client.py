"""
Squarespace Commerce API client.

Single point of outbound communication with Squarespace. Every resource
method is a thin typed wrapper around one shared request executor that
attaches authentication, encodes/decodes JSON and normalizes failures into
``SquarespaceAPIException``.

There is no retry, backoff, rate limiting or caching: each call is exactly
one HTTP round trip.
"""

import json
import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote, urlencode

import aiohttp
from pydantic import BaseModel

from storefront.api.v1.schemas.squarespace_schemas import (
    ApiResponse,
    CustomerProfile,
    InventoryItem,
    Order,
    Product,
    ProductVariant,
    SquarespaceErrorBody,
)
from storefront.core.config import SQUARESPACE_ENDPOINTS, SquarespaceConfig, get_settings, resolve_squarespace_config
from storefront.core.logging_config import log_api_call
from storefront.utils.error_handler import ConfigurationException, SquarespaceAPIException

logger = logging.getLogger(__name__)


def build_query(params: Mapping[str, Any]) -> str:
    """
    Encode the filters that are set, keeping their order.

    Falsy values (None, 0, "") are treated as not provided.

    Returns:
        str: ``?a=1&b=2``, or an empty string when nothing is set
    """
    present = [(key, str(value)) for key, value in params.items() if value]
    return f"?{urlencode(present)}" if present else ""


class SquarespaceClient:
    """
    Async client for the Squarespace Commerce API.

    Construct it once and pass it to whoever needs it. The HTTP session is
    created lazily on the first request unless one is injected; injected
    sessions are never closed by the client.
    """

    def __init__(
        self,
        config: Optional[SquarespaceConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Resolved Squarespace configuration (defaults to the environment)
            session: Existing aiohttp session to reuse
            user_agent: User-Agent sent on every request

        Raises:
            ConfigurationException: If the site identifier is empty
        """
        self.config = config or resolve_squarespace_config()

        if not self.config.site_id:
            raise ConfigurationException(
                "SQUARESPACE_SITE_ID environment variable is required",
                setting="SQUARESPACE_SITE_ID",
            )

        self.base_url = self.config.api_url.rstrip("/")
        self.user_agent = user_agent or get_settings().SQUARESPACE_USER_AGENT
        self.session = session
        self._owns_session = session is None

        logger.info(f"Initialized Squarespace client for site {self.config.site_id} ({self.base_url})")

    async def __aenter__(self) -> "SquarespaceClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if the client created it."""
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None
            logger.info("Squarespace client closed")

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()
            self._owns_session = True
        return self.session

    def _build_headers(self, headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """
        Default headers, caller headers, then authentication.

        The access token wins over the API key; with neither configured no
        Authorization header is sent and Squarespace rejects the call.
        """
        merged = {
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
            **(headers or {}),
        }

        if self.config.access_token:
            merged["Authorization"] = f"Bearer {self.config.access_token}"
        elif self.config.api_key:
            merged["Authorization"] = f"Bearer {self.config.api_key}"

        return merged

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        json_body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        Execute one request against the Commerce API.

        Args:
            endpoint: Path (and query string) relative to the API base URL
            method: HTTP method
            json_body: Payload to send as JSON
            headers: Extra headers

        Returns:
            The decoded JSON body, or None for an empty response

        Raises:
            SquarespaceAPIException: For non-2xx responses (vendor status) and
                for transport failures (status 0)
        """
        url = f"{self.base_url}{endpoint}"
        request_headers = self._build_headers(headers)
        data = json.dumps(json_body) if json_body is not None else None
        start_time = time.monotonic()
        status = 0

        try:
            session = self._get_session()
            async with session.request(method, url, data=data, headers=request_headers) as response:
                status = response.status
                body = await response.text()

            if not 200 <= status < 300:
                raise self._error_from_response(status, body, endpoint)

            return json.loads(body) if body.strip() else None

        except SquarespaceAPIException:
            raise
        except Exception as e:
            raise SquarespaceAPIException(
                f"Network error: {str(e) or type(e).__name__}",
                status_code=0,
                endpoint=endpoint,
            ) from e
        finally:
            log_api_call(method, url, status, time.monotonic() - start_time)

    @staticmethod
    def _error_from_response(status: int, body: str, endpoint: str) -> SquarespaceAPIException:
        """Turn a non-2xx response into the normalized error."""
        try:
            payload = json.loads(body)
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            return SquarespaceAPIException(f"HTTP {status}", status_code=status, details=body or None, endpoint=endpoint)

        # Only well-typed fields are trusted; the rest stays available in details.
        fields = {
            key: payload[key] for key in ("type", "message") if isinstance(payload.get(key), str) and payload[key]
        }
        error = SquarespaceErrorBody.model_validate(fields)
        return SquarespaceAPIException(error.message, status_code=status, details=payload, endpoint=endpoint)

    # ==================== PRODUCTS ====================

    async def get_products(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        category: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> ApiResponse[Product]:
        """
        List products, filtered by whichever options are given.

        Args:
            limit: Page size
            offset: Number of products to skip
            category: Category filter
            tag: Tag filter

        Returns:
            ApiResponse[Product]: Page of products
        """
        query = build_query({"limit": limit, "offset": offset, "category": category, "tag": tag})
        data = await self.request(f"{SQUARESPACE_ENDPOINTS['PRODUCTS']}{query}")
        return ApiResponse[Product].model_validate(data)

    async def get_product(self, product_id: str) -> Product:
        data = await self.request(f"{SQUARESPACE_ENDPOINTS['PRODUCTS']}/{quote(product_id, safe='')}")
        return Product.model_validate(data)

    async def get_product_variants(self, product_id: str) -> List[ProductVariant]:
        """Variants of a product; fetches the whole product."""
        product = await self.get_product(product_id)
        return product.products

    # ==================== ORDERS ====================

    async def get_orders(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        status: Optional[str] = None,
        customer_id: Optional[str] = None,
    ) -> ApiResponse[Order]:
        """
        List orders, filtered by whichever options are given.

        Args:
            limit: Page size
            offset: Number of orders to skip
            status: Order status filter
            customer_id: Only orders of this customer

        Returns:
            ApiResponse[Order]: Page of orders
        """
        query = build_query({"limit": limit, "offset": offset, "status": status, "customerId": customer_id})
        data = await self.request(f"{SQUARESPACE_ENDPOINTS['ORDERS']}{query}")
        return ApiResponse[Order].model_validate(data)

    async def get_order(self, order_id: str) -> Order:
        data = await self.request(f"{SQUARESPACE_ENDPOINTS['ORDERS']}/{quote(order_id, safe='')}")
        return Order.model_validate(data)

    async def create_order(self, order_data: Union[Mapping[str, Any], BaseModel]) -> Order:
        """
        Create an order.

        Args:
            order_data: Partial order; for models only the fields that were set are sent

        Returns:
            Order: The order as created by Squarespace
        """
        if isinstance(order_data, BaseModel):
            payload = order_data.model_dump(mode="json", exclude_unset=True)
        else:
            payload = dict(order_data)

        data = await self.request(SQUARESPACE_ENDPOINTS["ORDERS"], method="POST", json_body=payload)
        return Order.model_validate(data)

    # ==================== INVENTORY ====================

    async def get_inventory(self, product_id: str) -> InventoryItem:
        data = await self.request(f"{SQUARESPACE_ENDPOINTS['INVENTORY']}/{quote(product_id, safe='')}")
        return InventoryItem.model_validate(data)

    async def update_inventory(self, product_id: str, quantity: int) -> Optional[InventoryItem]:
        """
        Set the stock quantity of a product.

        Returns:
            InventoryItem: Updated record, or None when Squarespace answers without a body
        """
        data = await self.request(
            f"{SQUARESPACE_ENDPOINTS['INVENTORY']}/{quote(product_id, safe='')}",
            method="PATCH",
            json_body={"quantity": quantity},
        )
        return InventoryItem.model_validate(data) if data is not None else None

    # ==================== PROFILES ====================

    async def get_customer_profile(self, customer_id: str) -> CustomerProfile:
        data = await self.request(f"{SQUARESPACE_ENDPOINTS['PROFILES']}/{quote(customer_id, safe='')}")
        return CustomerProfile.model_validate(data)

    # ==================== HEALTH ====================

    async def health_check(self) -> bool:
        """
        Availability check: request a single product.

        Returns:
            bool: True if the call succeeded; any error gives False
        """
        try:
            await self.get_products(limit=1)
            return True
        except Exception as e:
            logger.warning(f"Squarespace health check failed: {e}")
            return False

    def __repr__(self):
        return (
            f"SquarespaceClient("
            f"base_url='{self.base_url}', "
            f"site_id='{self.config.site_id}', "
            f"session_open={self.session is not None and not self.session.closed})"
        )
