"""
Tests for PrintifyClient.

Verifies:
- Bearer auth and shop-scoped endpoints
- Exponential backoff on 5xx and timeouts
- One full window wait on 429
- Immediate failure on 4xx, DNS/connection errors and the local limiter
- Response schema validation at the boundary
"""

import httpx
import pytest

from storefront.clients import PrintifyClient, PrintifyClientFactory, backoff_delay
from storefront.core.domain import ConfigurationError
from storefront.models.printify import (
    PrintifyAuthError,
    PrintifyBadRequestError,
    PrintifyNetworkError,
    PrintifyNotFoundError,
    PrintifyPaymentRequiredError,
    PrintifyRateLimitError,
    PrintifyResponseError,
    PrintifyServerError,
    PrintifyTimeoutError,
    PrintifyValidationError,
)
from storefront.utils.rate_limiter import RateLimitExceeded, WindowRateLimiter
from tests.factories import SHOP_ID, printify_order_payload, printify_product_payload


class CountingHandler:
    """MockTransport handler replaying a list of responses (or exceptions)."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes[min(len(self.requests), len(self.outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class TestBackoffPolicy:
    def test_backoff_doubles_per_attempt(self):
        assert [backoff_delay(a) for a in (1, 2, 3)] == [2.0, 4.0, 8.0]


class TestPrintifyClientConfiguration:
    def test_missing_token_is_configuration_error(self, rate_limiter):
        with pytest.raises(ConfigurationError) as exc_info:
            PrintifyClient(api_token=None, shop_id=SHOP_ID, rate_limiter=rate_limiter)
        assert exc_info.value.setting == "PRINTIFY_API_TOKEN"

    def test_missing_shop_is_configuration_error(self, rate_limiter):
        with pytest.raises(ConfigurationError) as exc_info:
            PrintifyClient(api_token="tok", shop_id="", rate_limiter=rate_limiter)
        assert exc_info.value.setting == "PRINTIFY_SHOP_ID"

    def test_factory_uses_settings(self, rate_limiter, settings):
        client = PrintifyClientFactory.create_client(rate_limiter, settings)
        assert client.shop_id == SHOP_ID
        assert client.base_url == "https://api.printify.test/v1"

    @pytest.mark.asyncio
    async def test_request_outside_context_fails(self, rate_limiter):
        client = PrintifyClient(api_token="tok", shop_id=SHOP_ID, rate_limiter=rate_limiter)
        with pytest.raises(Exception) as exc_info:
            await client.request("/shops.json")
        assert "not initialized" in str(exc_info.value)


class TestPrintifyClientRequests:
    @pytest.mark.asyncio
    async def test_sends_bearer_token_and_user_agent(self, make_client):
        handler = CountingHandler(httpx.Response(200, json=printify_product_payload()))

        async with make_client(handler) as client:
            product = await client.get_product("42")

        request = handler.requests[0]
        assert request.headers["Authorization"] == "Bearer test-token"
        assert request.headers["User-Agent"] == "SDFM-Store/1.0"
        assert request.url.path == f"/v1/shops/{SHOP_ID}/products/42.json"
        assert product.id == "42"
        assert [v.id for v in product.variants] == [1, 2]

    @pytest.mark.asyncio
    async def test_products_listing_passes_pagination(self, make_client):
        handler = CountingHandler(
            httpx.Response(200, json={"current_page": 2, "last_page": 3, "total": 25, "data": []})
        )

        async with make_client(handler) as client:
            page = await client.get_products(page=2, limit=5)

        assert handler.requests[0].url.params["page"] == "2"
        assert handler.requests[0].url.params["limit"] == "5"
        assert page.current_page == 2
        assert page.total == 25

    @pytest.mark.asyncio
    async def test_calculate_shipping_posts_line_items_and_address(self, make_client):
        handler = CountingHandler(httpx.Response(200, json={"standard": 750, "express": 1500}))

        async with make_client(handler) as client:
            rates = await client.calculate_shipping(
                [{"product_id": "42", "variant_id": 2, "quantity": 1}], {"country": "US"}
            )

        request = handler.requests[0]
        assert request.method == "POST"
        assert b'"address_to"' in request.content
        assert rates.standard == 750
        assert rates.priority is None

    @pytest.mark.asyncio
    async def test_empty_body_returns_empty_dict(self, make_client):
        handler = CountingHandler(httpx.Response(200, content=b""))

        async with make_client(handler) as client:
            result = await client.send_to_production("ord-1")

        assert result == {}
        assert handler.requests[0].url.path.endswith("/orders/ord-1/send_to_production.json")

    @pytest.mark.asyncio
    async def test_invalid_schema_is_parse_error(self, make_client):
        handler = CountingHandler(httpx.Response(200, json={"title": "no id"}))

        async with make_client(handler) as client:
            with pytest.raises(PrintifyResponseError):
                await client.get_product("42")

    @pytest.mark.asyncio
    async def test_undecodable_body_is_parse_error(self, make_client):
        handler = CountingHandler(httpx.Response(200, content=b"<html>oops</html>"))

        async with make_client(handler) as client:
            with pytest.raises(PrintifyResponseError):
                await client.request("/shops.json")

    @pytest.mark.asyncio
    async def test_order_status_is_kept_verbatim(self, make_client):
        handler = CountingHandler(httpx.Response(200, json=printify_order_payload(status="in-production")))

        async with make_client(handler) as client:
            order = await client.get_order("ord-1")

        assert order.status == "in-production"
        assert order.total_price == 6000


class TestPrintifyClientRetry:
    @pytest.mark.asyncio
    async def test_server_error_is_retried_with_backoff(self, make_client, fake_sleep):
        handler = CountingHandler(httpx.Response(503, json={"message": "unavailable"}))

        async with make_client(handler, max_retries=3) as client:
            with pytest.raises(PrintifyServerError) as exc_info:
                await client.get_product("42")

        assert exc_info.value.status_code == 503
        assert len(handler.requests) == 3
        assert [call.args[0] for call in fake_sleep.await_args_list] == [2.0, 4.0]

    @pytest.mark.asyncio
    async def test_server_error_then_success(self, make_client, fake_sleep):
        handler = CountingHandler(
            httpx.Response(502),
            httpx.Response(200, json=printify_product_payload()),
        )

        async with make_client(handler) as client:
            product = await client.get_product("42")

        assert product.id == "42"
        assert len(handler.requests) == 2
        fake_sleep.assert_awaited_once_with(2.0)

    @pytest.mark.asyncio
    async def test_explicit_single_attempt_is_honoured(self, make_client, fake_sleep):
        handler = CountingHandler(httpx.Response(503))

        async with make_client(handler, max_retries=3) as client:
            with pytest.raises(PrintifyServerError):
                await client.request_with_retry(f"/shops/{SHOP_ID}/products/42.json", max_retries=1)

        assert len(handler.requests) == 1
        fake_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_attempts_is_rejected(self, make_client):
        handler = CountingHandler(httpx.Response(200, json={}))

        async with make_client(handler) as client:
            with pytest.raises(ValueError):
                await client.request_with_retry(f"/shops/{SHOP_ID}/products.json", max_retries=0)

        assert handler.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code,error_type",
        [
            (400, PrintifyBadRequestError),
            (401, PrintifyAuthError),
            (402, PrintifyPaymentRequiredError),
            (404, PrintifyNotFoundError),
            (422, PrintifyValidationError),
        ],
    )
    async def test_client_errors_are_not_retried(self, make_client, fake_sleep, status_code, error_type):
        handler = CountingHandler(httpx.Response(status_code, json={"message": "nope"}))

        async with make_client(handler) as client:
            with pytest.raises(error_type):
                await client.get_product("42")

        assert len(handler.requests) == 1
        fake_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rate_limited_waits_one_window(self, make_client, fake_sleep):
        handler = CountingHandler(
            httpx.Response(429, json={"message": "slow down"}),
            httpx.Response(200, json=printify_product_payload()),
        )

        async with make_client(handler) as client:
            await client.get_product("42")

        fake_sleep.assert_awaited_once_with(60.0)

    @pytest.mark.asyncio
    async def test_rate_limited_on_last_attempt_raises(self, make_client, fake_sleep):
        handler = CountingHandler(httpx.Response(429))

        async with make_client(handler, max_retries=2) as client:
            with pytest.raises(PrintifyRateLimitError):
                await client.get_product("42")

        assert len(handler.requests) == 2
        assert fake_sleep.await_count == 1

    @pytest.mark.asyncio
    async def test_timeout_is_retried_then_raised(self, make_client, fake_sleep):
        handler = CountingHandler(httpx.ReadTimeout("timed out"))

        async with make_client(handler, max_retries=2) as client:
            with pytest.raises(PrintifyTimeoutError) as exc_info:
                await client.get_product("42")

        assert exc_info.value.error_code == "TIMEOUT"
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_connection_error_is_not_retried(self, make_client, fake_sleep):
        handler = CountingHandler(httpx.ConnectError("Name or service not known"))

        async with make_client(handler) as client:
            with pytest.raises(PrintifyNetworkError) as exc_info:
                await client.get_product("42")

        assert "DNS/Connection error" in exc_info.value.error_message
        assert len(handler.requests) == 1
        fake_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_local_rate_limit_is_not_retried(self, make_client, fake_clock, fake_sleep):
        limiter = WindowRateLimiter(limit=1, window_seconds=60.0, clock=fake_clock)
        handler = CountingHandler(httpx.Response(503))

        async with make_client(handler, limiter=limiter) as client:
            with pytest.raises(RateLimitExceeded):
                await client.get_product("42")

        # first attempt sent, the retry hit the local ceiling
        assert len(handler.requests) == 1
        assert limiter.status().is_limited is True

    @pytest.mark.asyncio
    async def test_every_attempt_counts_against_limiter(self, make_client, rate_limiter):
        handler = CountingHandler(httpx.Response(500))

        async with make_client(handler, max_retries=3) as client:
            with pytest.raises(PrintifyServerError):
                await client.get_product("42")

        assert rate_limiter.status().request_count == 3


class TestPrintifyClientHealth:
    @pytest.mark.asyncio
    async def test_healthy(self, make_client):
        handler = CountingHandler(httpx.Response(200, json={"total": 12, "data": []}))

        async with make_client(handler) as client:
            result = await client.health_check()

        assert result["status"] == "healthy"
        assert result["details"]["product_count"] == 12

    @pytest.mark.asyncio
    async def test_unhealthy_is_reported_not_raised(self, make_client, fake_sleep):
        handler = CountingHandler(httpx.Response(401))

        async with make_client(handler) as client:
            result = await client.health_check()

        assert result["status"] == "unhealthy"
        assert len(handler.requests) == 1
