"""
Tests for PrintifyFulfillmentProvider (Printify payloads -> domain entities).
"""

import json

import httpx
import pytest

from storefront.domains.ecommerce.domain import (
    LineItem,
    OrderNotFoundError,
    OrderStatus,
    ProductNotFoundError,
)
from storefront.domains.ecommerce.infrastructure import PrintifyFulfillmentProvider
from tests.factories import printify_order_payload, printify_product_payload


def route(responses: dict[str, httpx.Response], seen: list[httpx.Request] | None = None):
    """Handler answering by "METHOD path-suffix"."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        for key, response in responses.items():
            method, suffix = key.split(" ", 1)
            if request.method == method and request.url.path.endswith(suffix):
                return response
        return httpx.Response(404, json={"message": "not found"})

    return handler


class TestCatalog:
    @pytest.mark.asyncio
    async def test_get_product_maps_variants_and_images(self, make_client):
        handler = route({"GET /products/42.json": httpx.Response(200, json=printify_product_payload())})

        async with make_client(handler) as client:
            product = await PrintifyFulfillmentProvider(client).get_product("42")

        assert product.id == "42"
        assert product.default_variant().id == 2
        assert product.min_price().cents == 2000
        assert product.default_image() == "https://img.test/front.png"
        assert product.secondary_image() == "https://img.test/back.png"
        assert product.created_at.year == 2024

    @pytest.mark.asyncio
    async def test_missing_product_is_domain_not_found(self, make_client):
        async with make_client(route({})) as client:
            with pytest.raises(ProductNotFoundError):
                await PrintifyFulfillmentProvider(client).get_product("nope")

    @pytest.mark.asyncio
    async def test_list_products_keeps_pagination(self, make_client):
        body = {
            "current_page": 1,
            "last_page": 2,
            "total": 11,
            "data": [printify_product_payload("a"), printify_product_payload("b", visible=False)],
        }
        handler = route({"GET /products.json": httpx.Response(200, json=body)})

        async with make_client(handler) as client:
            page = await PrintifyFulfillmentProvider(client).list_products(page=1, limit=10)

        assert [p.id for p in page.items] == ["a", "b"]
        assert page.has_next is True
        assert page.has_prev is False


class TestShipping:
    @pytest.mark.asyncio
    async def test_quote_in_cents(self, make_client, us_address):
        seen: list[httpx.Request] = []
        handler = route(
            {"POST /orders/shipping.json": httpx.Response(200, json={"standard": 750, "express": 1800})}, seen
        )

        async with make_client(handler) as client:
            quote = await PrintifyFulfillmentProvider(client).quote_shipping(
                [LineItem("42", 2, 1)], us_address
            )

        assert quote.standard.cents == 750
        assert quote.express.cents == 1800
        body = json.loads(seen[0].content)
        assert body["line_items"] == [{"product_id": "42", "variant_id": 2, "quantity": 1}]
        assert body["address_to"]["region"] == "CA"
        assert body["address_to"]["zip"] == "95014"

    @pytest.mark.asyncio
    async def test_quote_without_standard_is_none(self, make_client, us_address):
        handler = route({"POST /orders/shipping.json": httpx.Response(200, json={"express": 1800})})

        async with make_client(handler) as client:
            quote = await PrintifyFulfillmentProvider(client).quote_shipping([LineItem("42", 2, 1)], us_address)

        assert quote is None


class TestOrders:
    @pytest.mark.asyncio
    async def test_create_order_payload(self, make_client, us_address):
        seen: list[httpx.Request] = []
        handler = route({"POST /orders.json": httpx.Response(200, json={"id": "ord-1"})}, seen)

        async with make_client(handler) as client:
            order = await PrintifyFulfillmentProvider(client).create_order(
                [LineItem("42", 2, 3)], us_address, external_id="SDFM-1", label="SDFM Store Order"
            )

        body = json.loads(seen[0].content)
        assert body["external_id"] == "SDFM-1"
        assert body["send_shipping_notification"] is True
        assert body["address_to"]["email"] == "ada@example.com"
        assert order.id == "ord-1"
        assert order.status == OrderStatus.UNKNOWN

    @pytest.mark.asyncio
    async def test_get_order_maps_status_and_money(self, make_client):
        handler = route({"GET /orders/ord-1.json": httpx.Response(200, json=printify_order_payload())})

        async with make_client(handler) as client:
            order = await PrintifyFulfillmentProvider(client).get_order("ord-1")

        assert order.status == OrderStatus.ON_HOLD
        assert order.raw_status == "on-hold"
        assert order.total_price.cents + order.total_shipping.cents + order.total_tax.cents == 7380
        assert order.line_items[0].shipping_cost.cents == 900
        assert order.line_items[0].quantity == 3

    @pytest.mark.asyncio
    async def test_missing_order_is_domain_not_found(self, make_client):
        async with make_client(route({})) as client:
            with pytest.raises(OrderNotFoundError):
                await PrintifyFulfillmentProvider(client).get_order("missing")

    @pytest.mark.asyncio
    async def test_cancel_returns_order_from_response(self, make_client):
        handler = route(
            {"POST /orders/ord-1/cancel.json": httpx.Response(200, json=printify_order_payload(status="canceled"))}
        )

        async with make_client(handler) as client:
            order = await PrintifyFulfillmentProvider(client).cancel_order("ord-1")

        assert order.status == OrderStatus.CANCELED

    @pytest.mark.asyncio
    async def test_rate_limit_status_snapshot(self, make_client):
        handler = route({"GET /orders/ord-1.json": httpx.Response(200, json=printify_order_payload())})

        async with make_client(handler) as client:
            provider = PrintifyFulfillmentProvider(client)
            await provider.get_order("ord-1")
            status = provider.rate_limit_status()

        assert status["request_count"] == 1
        assert status["remaining"] == 599
