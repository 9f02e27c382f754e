"""
Shared fixtures: a local aiohttp server standing in for the Squarespace API
and sample Squarespace payloads.
"""

import json
from collections import deque
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer
from multidict import CIMultiDict

from storefront.core.config import SquarespaceConfig
from storefront.db.squarespace_client import SquarespaceClient


@dataclass
class RecordedRequest:
    method: str
    path_qs: str
    raw_path: str
    headers: Mapping[str, str]
    body: str

    @property
    def json(self) -> Any:
        return json.loads(self.body) if self.body else None


class FakeSquarespace:
    """Records every request and answers with queued responses (default: empty page)."""

    def __init__(self):
        self.requests = []
        self._responses = deque()
        self.app = web.Application()
        self.app.router.add_route("*", "/{tail:.*}", self._handle)
        self.server: Optional[TestServer] = None

    def respond(self, status: int = 200, json_body: Any = None, text: Optional[str] = None) -> None:
        if text is None:
            text = json.dumps(json_body) if json_body is not None else ""
        self._responses.append((status, text))

    async def _handle(self, request: web.Request) -> web.Response:
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path_qs=request.path_qs,
                raw_path=request.raw_path,
                headers=CIMultiDict(request.headers),
                body=await request.text(),
            )
        )
        status, text = self._responses.popleft() if self._responses else (200, json.dumps({"result": []}))
        if status == 204 or not text:
            return web.Response(status=status)
        return web.Response(status=status, text=text, content_type="application/json")

    @property
    def url(self) -> str:
        return f"http://{self.server.host}:{self.server.port}"

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]


@pytest_asyncio.fixture
async def squarespace_server():
    """Local Squarespace stand-in."""
    fake = FakeSquarespace()
    fake.server = TestServer(fake.app)
    await fake.server.start_server()
    yield fake
    await fake.server.close()


def make_config(api_url: str = "https://api.squarespace.com", **overrides) -> SquarespaceConfig:
    values = {"api_url": api_url, "site_id": "site-123", "access_token": "token-abc"}
    values.update(overrides)
    return SquarespaceConfig(**values)


@pytest_asyncio.fixture
async def squarespace_client(squarespace_server):
    """Client pointed at the local server, authenticated with an access token."""
    client = SquarespaceClient(make_config(squarespace_server.url), user_agent="store.adrienbird.net/1.0")
    yield client
    await client.close()


# ==================== SAMPLE PAYLOADS ====================


def variant_payload(**overrides) -> Dict[str, Any]:
    variant = {
        "id": "var-1",
        "sku": "SKU-1",
        "name": "Linen Shirt",
        "description": "Relaxed fit linen shirt",
        "images": [
            {
                "assetId": "asset-1",
                "url": "https://images.example.com/shirt.jpg",
                "description": "Linen shirt front",
                "mimeType": "image/jpeg",
                "width": 800,
                "height": 800,
            }
        ],
        "pricing": {
            "basePrice": {"value": "49.00", "currency": "USD"},
            "onSale": False,
        },
        "stock": {"trackInventory": True, "quantity": 7, "allowBackorder": False, "unlimited": False},
        "visibility": "PUBLIC",
    }
    variant.update(overrides)
    return variant


def product_payload(product_id: str = "prod-1", variants=None, **overrides) -> Dict[str, Any]:
    product = {
        "id": product_id,
        "type": "PRODUCT",
        "categories": ["shirts"],
        "tags": ["summer"],
        "products": [variant_payload()] if variants is None else variants,
        "systemData": {"createdOn": 1700000000000, "modifiedOn": 1700000500000},
    }
    product.update(overrides)
    return product


def money(value: str) -> Dict[str, str]:
    return {"value": value, "currency": "USD"}


def order_payload(order_id: str = "ord-1", **overrides) -> Dict[str, Any]:
    order = {
        "id": order_id,
        "orderNumber": "1001",
        "customerId": "cust-1",
        "email": "buyer@example.com",
        "billingAddress": {
            "firstName": "Ada",
            "lastName": "Bird",
            "addressLine1": "1 Main St",
            "city": "Portland",
            "state": "OR",
            "postalCode": "97201",
            "country": "US",
        },
        "lineItems": [
            {
                "productId": "prod-1",
                "variantId": "var-1",
                "sku": "SKU-1",
                "productName": "Linen Shirt",
                "quantity": 2,
                "unitPrice": money("49.00"),
                "totalPrice": money("98.00"),
            }
        ],
        "totals": {
            "subtotal": money("98.00"),
            "tax": money("0.00"),
            "shipping": money("5.00"),
            "discount": money("0.00"),
            "total": money("103.00"),
        },
        "status": "PENDING",
        "fulfillments": [],
        "systemData": {"createdOn": 1700000000000, "modifiedOn": 1700000000000},
    }
    order.update(overrides)
    return order


@pytest.fixture
def sample_product():
    return product_payload()


@pytest.fixture
def sample_order():
    return order_payload()
