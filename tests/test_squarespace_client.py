"""
Tests for the Squarespace Commerce API client.

The client talks to a local aiohttp server (see conftest) so headers, query
strings and bodies are checked exactly as they leave the process.
"""

from unittest.mock import ANY, AsyncMock, patch

import aiohttp
import pytest

from storefront.api.v1.schemas.squarespace_schemas import OrderDraft, OrderStatus, ProductVisibility
from storefront.db.squarespace_client import SquarespaceClient, build_query
from storefront.utils.error_handler import ConfigurationException, ErrorCode, SquarespaceAPIException
from tests.conftest import make_config, order_payload, product_payload, variant_payload


class TestConstruction:
    def test_empty_site_id_is_rejected(self):
        with patch("storefront.db.squarespace_client.aiohttp.ClientSession") as session_cls:
            with pytest.raises(ConfigurationException) as exc_info:
                SquarespaceClient(make_config(site_id=""))

        assert exc_info.value.error_code is ErrorCode.CONFIGURATION_ERROR
        assert exc_info.value.setting == "SQUARESPACE_SITE_ID"
        session_cls.assert_not_called()

    def test_base_url_trailing_slash_is_dropped(self):
        client = SquarespaceClient(make_config("https://api.squarespace.com/"), user_agent="ua")
        assert client.base_url == "https://api.squarespace.com"

    def test_session_is_created_lazily(self):
        client = SquarespaceClient(make_config(), user_agent="ua")
        assert client.session is None
        assert "session_open=False" in repr(client)


class TestBuildQuery:
    def test_no_filters_gives_no_query_string(self):
        assert build_query({"limit": None, "offset": None}) == ""

    def test_falsy_values_are_skipped_and_order_kept(self):
        assert build_query({"limit": 5, "offset": 0, "category": "x", "tag": ""}) == "?limit=5&category=x"

    def test_values_are_url_encoded(self):
        assert build_query({"tag": "summer sale"}) == "?tag=summer+sale"


class TestHeaders:
    @pytest.mark.asyncio
    async def test_access_token_wins_over_api_key(self, squarespace_server):
        config = make_config(squarespace_server.url, access_token="token-abc", api_key="key-xyz")
        async with SquarespaceClient(config, user_agent="store.adrienbird.net/1.0") as client:
            await client.get_products()

        headers = squarespace_server.last_request.headers
        assert headers["Authorization"] == "Bearer token-abc"
        assert headers["User-Agent"] == "store.adrienbird.net/1.0"
        assert headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_api_key_used_when_only_credential(self, squarespace_server):
        config = make_config(squarespace_server.url, access_token=None, api_key="key-xyz")
        async with SquarespaceClient(config, user_agent="ua") as client:
            await client.get_products()

        assert squarespace_server.last_request.headers["Authorization"] == "Bearer key-xyz"

    @pytest.mark.asyncio
    async def test_no_credentials_sends_no_authorization(self, squarespace_server):
        config = make_config(squarespace_server.url, access_token=None, api_key=None)
        async with SquarespaceClient(config, user_agent="ua") as client:
            await client.get_products()

        assert "Authorization" not in squarespace_server.last_request.headers

    @pytest.mark.asyncio
    async def test_caller_headers_are_merged(self, squarespace_client, squarespace_server):
        squarespace_server.respond(json_body={"result": []})

        await squarespace_client.request("/1.0/commerce/products", headers={"X-Trace": "abc"})

        headers = squarespace_server.last_request.headers
        assert headers["X-Trace"] == "abc"
        assert headers["Authorization"] == "Bearer token-abc"


class TestProducts:
    @pytest.mark.asyncio
    async def test_get_products_without_filters(self, squarespace_client, squarespace_server):
        squarespace_server.respond(json_body={"result": [product_payload()], "pagination": {"nextPage": "abc"}})

        response = await squarespace_client.get_products()

        assert squarespace_server.last_request.method == "GET"
        assert squarespace_server.last_request.path_qs == "/1.0/commerce/products"
        assert len(response.result) == 1
        assert response.result[0].id == "prod-1"
        assert response.result[0].products[0].visibility is ProductVisibility.PUBLIC
        assert response.pagination.nextPage == "abc"

    @pytest.mark.asyncio
    async def test_get_products_with_filters(self, squarespace_client, squarespace_server):
        await squarespace_client.get_products(limit=5, category="x")

        assert squarespace_server.last_request.path_qs == "/1.0/commerce/products?limit=5&category=x"

    @pytest.mark.asyncio
    async def test_get_products_all_filters_in_order(self, squarespace_client, squarespace_server):
        await squarespace_client.get_products(tag="t", category="c", offset=10, limit=2)

        assert squarespace_server.last_request.path_qs == "/1.0/commerce/products?limit=2&offset=10&category=c&tag=t"

    @pytest.mark.asyncio
    async def test_get_product(self, squarespace_client, squarespace_server):
        squarespace_server.respond(json_body=product_payload("prod-9", extraField="kept"))

        product = await squarespace_client.get_product("prod-9")

        assert squarespace_server.last_request.path_qs == "/1.0/commerce/products/prod-9"
        assert product.id == "prod-9"
        assert product.model_extra["extraField"] == "kept"

    @pytest.mark.asyncio
    async def test_get_product_variants_equals_product_variants(self, squarespace_client, squarespace_server):
        payload = product_payload(variants=[variant_payload(id="var-1"), variant_payload(id="var-2", sku="SKU-2")])
        squarespace_server.respond(json_body=payload)
        squarespace_server.respond(json_body=payload)

        product = await squarespace_client.get_product("prod-1")
        variants = await squarespace_client.get_product_variants("prod-1")

        assert variants == product.products
        assert [v.id for v in variants] == ["var-1", "var-2"]


class TestOrders:
    @pytest.mark.asyncio
    async def test_get_orders_maps_customer_id(self, squarespace_client, squarespace_server):
        squarespace_server.respond(json_body={"result": [order_payload()]})

        response = await squarespace_client.get_orders(limit=10, status="PENDING", customer_id="cust-1")

        assert squarespace_server.last_request.path_qs == "/1.0/commerce/orders?limit=10&status=PENDING&customerId=cust-1"
        assert response.result[0].status is OrderStatus.PENDING

    @pytest.mark.asyncio
    async def test_get_order(self, squarespace_client, squarespace_server):
        squarespace_server.respond(json_body=order_payload("ord-7"))

        order = await squarespace_client.get_order("ord-7")

        assert squarespace_server.last_request.path_qs == "/1.0/commerce/orders/ord-7"
        assert order.totals.total.value == "103.00"

    @pytest.mark.asyncio
    async def test_create_order_posts_mapping(self, squarespace_client, squarespace_server):
        squarespace_server.respond(status=201, json_body=order_payload())

        order = await squarespace_client.create_order({"email": "buyer@example.com", "lineItems": []})

        request = squarespace_server.last_request
        assert request.method == "POST"
        assert request.path_qs == "/1.0/commerce/orders"
        assert request.json == {"email": "buyer@example.com", "lineItems": []}
        assert order.id == "ord-1"

    @pytest.mark.asyncio
    async def test_create_order_sends_only_set_fields(self, squarespace_client, squarespace_server):
        squarespace_server.respond(status=201, json_body=order_payload())

        await squarespace_client.create_order(OrderDraft(email="buyer@example.com"))

        assert squarespace_server.last_request.json == {"email": "buyer@example.com"}


class TestInventoryAndProfiles:
    @pytest.mark.asyncio
    async def test_get_inventory(self, squarespace_client, squarespace_server):
        squarespace_server.respond(json_body={"variantId": "var-1", "sku": "SKU-1", "quantity": 4})

        item = await squarespace_client.get_inventory("prod-1")

        assert squarespace_server.last_request.path_qs == "/1.0/commerce/inventory/prod-1"
        assert item.quantity == 4
        assert item.isUnlimited is False

    @pytest.mark.asyncio
    async def test_update_inventory_patches_quantity(self, squarespace_client, squarespace_server):
        squarespace_server.respond(json_body={"variantId": "var-1", "quantity": 3})

        item = await squarespace_client.update_inventory("prod-1", 3)

        request = squarespace_server.last_request
        assert request.method == "PATCH"
        assert request.json == {"quantity": 3}
        assert item.quantity == 3

    @pytest.mark.asyncio
    async def test_update_inventory_without_body_returns_none(self, squarespace_client, squarespace_server):
        squarespace_server.respond(status=204)

        assert await squarespace_client.update_inventory("prod-1", 0) is None

    @pytest.mark.asyncio
    async def test_get_customer_profile(self, squarespace_client, squarespace_server):
        squarespace_server.respond(json_body={"id": "cust-1", "email": "buyer@example.com", "isCustomer": True})

        profile = await squarespace_client.get_customer_profile("cust-1")

        assert squarespace_server.last_request.path_qs == "/1.0/commerce/profiles/cust-1"
        assert profile.email == "buyer@example.com"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "call, path",
    [
        (lambda client: client.get_product("a/b?limit=1#x"), "/1.0/commerce/products/"),
        (lambda client: client.get_order("a/b?limit=1#x"), "/1.0/commerce/orders/"),
        (lambda client: client.get_inventory("a/b?limit=1#x"), "/1.0/commerce/inventory/"),
        (lambda client: client.update_inventory("a/b?limit=1#x", 1), "/1.0/commerce/inventory/"),
        (lambda client: client.get_customer_profile("a/b?limit=1#x"), "/1.0/commerce/profiles/"),
    ],
)
async def test_ids_are_escaped_as_one_path_segment(squarespace_client, squarespace_server, call, path):
    squarespace_server.respond(status=404, json_body={"message": "not found"})

    with pytest.raises(SquarespaceAPIException):
        await call(squarespace_client)

    request = squarespace_server.last_request
    assert request.raw_path == f"{path}a%2Fb%3Flimit%3D1%23x"
    assert "?" not in request.path_qs


class TestErrors:
    @pytest.mark.asyncio
    async def test_vendor_error_keeps_status_and_message(self, squarespace_client, squarespace_server):
        body = {"type": "NotFound", "message": "no such product"}
        squarespace_server.respond(status=404, json_body=body)

        with pytest.raises(SquarespaceAPIException) as exc_info:
            await squarespace_client.get_product("missing")

        error = exc_info.value
        assert error.status_code == 404
        assert error.message == "no such product"
        assert error.details == body
        assert error.error_code is ErrorCode.SQUARESPACE_API_ERROR
        assert error.endpoint == "/1.0/commerce/products/missing"
        assert not error.is_network_error

    @pytest.mark.asyncio
    async def test_non_json_error_body(self, squarespace_client, squarespace_server):
        squarespace_server.respond(status=502, text="Bad Gateway")

        with pytest.raises(SquarespaceAPIException) as exc_info:
            await squarespace_client.get_products()

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "HTTP 502"
        assert exc_info.value.details == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_error_body_without_message(self, squarespace_client, squarespace_server):
        squarespace_server.respond(status=401, json_body={})

        with pytest.raises(SquarespaceAPIException) as exc_info:
            await squarespace_client.get_products()

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Unknown error"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, message",
        [
            ({"type": "NotFound", "message": None}, "Unknown error"),
            ({"type": None, "message": "no such product"}, "no such product"),
            ({"type": "NotFound", "message": 42}, "Unknown error"),
        ],
    )
    async def test_error_body_with_unexpected_types_keeps_status(
        self, squarespace_client, squarespace_server, body, message
    ):
        squarespace_server.respond(status=404, json_body=body)

        with pytest.raises(SquarespaceAPIException) as exc_info:
            await squarespace_client.get_product("x")

        error = exc_info.value
        assert error.status_code == 404
        assert error.error_code is ErrorCode.SQUARESPACE_API_ERROR
        assert error.message == message
        assert error.details == body

    @pytest.mark.asyncio
    async def test_transport_failure_is_network_error(self):
        client = SquarespaceClient(make_config("http://127.0.0.1:1"), user_agent="ua")

        try:
            with pytest.raises(SquarespaceAPIException) as exc_info:
                await client.get_products()
        finally:
            await client.close()

        error = exc_info.value
        assert error.status_code == 0
        assert error.message.startswith("Network error:")
        assert error.error_code is ErrorCode.NETWORK_ERROR
        assert error.is_network_error

    @pytest.mark.asyncio
    async def test_malformed_success_body_is_network_error(self, squarespace_client, squarespace_server):
        squarespace_server.respond(status=200, text="<html>")

        with pytest.raises(SquarespaceAPIException) as exc_info:
            await squarespace_client.request("/1.0/commerce/products")

        assert exc_info.value.status_code == 0

    @pytest.mark.asyncio
    async def test_every_call_is_logged(self, squarespace_client, squarespace_server):
        squarespace_server.respond(status=404, json_body={"message": "nope"})

        with patch("storefront.db.squarespace_client.log_api_call") as log_call:
            with pytest.raises(SquarespaceAPIException):
                await squarespace_client.get_order("x")

        log_call.assert_called_once_with("GET", f"{squarespace_server.url}/1.0/commerce/orders/x", 404, ANY)


class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_healthy_requests_one_product(self, squarespace_client, squarespace_server):
        assert await squarespace_client.health_check() is True
        assert squarespace_server.last_request.path_qs == "/1.0/commerce/products?limit=1"

    @pytest.mark.asyncio
    async def test_vendor_error_is_unhealthy(self, squarespace_client, squarespace_server):
        squarespace_server.respond(status=500, json_body={"message": "boom"})

        assert await squarespace_client.health_check() is False

    @pytest.mark.asyncio
    async def test_any_exception_is_unhealthy(self):
        client = SquarespaceClient(make_config(), user_agent="ua")

        with patch.object(client, "get_products", AsyncMock(side_effect=RuntimeError("boom"))):
            assert await client.health_check() is False


class TestSessionLifecycle:
    @pytest.mark.asyncio
    async def test_close_releases_owned_session(self, squarespace_server):
        client = SquarespaceClient(make_config(squarespace_server.url), user_agent="ua")
        await client.get_products()
        session = client.session

        await client.close()

        assert session.closed
        assert client.session is None

    @pytest.mark.asyncio
    async def test_injected_session_is_not_closed(self, squarespace_server):
        async with aiohttp.ClientSession() as session:
            client = SquarespaceClient(make_config(squarespace_server.url), session=session, user_agent="ua")
            await client.get_products()
            await client.close()

            assert not session.closed
            assert client.session is session
