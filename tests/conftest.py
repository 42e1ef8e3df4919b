"""
Shared pytest fixtures for all tests.

Fake clock and sleep for the rate limiter and retry policy, a Printify
client wired to httpx.MockTransport, and a fulfillment provider double.
"""

import os
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("PRINTIFY_API_TOKEN", "test-token")
os.environ.setdefault("PRINTIFY_SHOP_ID", "12345")

from storefront.clients import PrintifyClient  # noqa: E402
from storefront.config.settings import Settings  # noqa: E402
from storefront.domains.ecommerce.domain import OrderStatus, ShippingAddress  # noqa: E402
from storefront.utils.rate_limiter import WindowRateLimiter  # noqa: E402
from tests.factories import BASE_URL, SHOP_ID, FakeClock, make_order, make_product  # noqa: E402

# ============================================================================
# SETTINGS / RATE LIMIT FIXTURES
# ============================================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ENVIRONMENT="test",
        PRINTIFY_API_TOKEN="test-token",
        PRINTIFY_SHOP_ID=SHOP_ID,
        PRINTIFY_API_BASE_URL=BASE_URL,
        PRODUCTION_SUBMIT_DELAY_SECONDS=0.0,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rate_limiter(fake_clock) -> WindowRateLimiter:
    return WindowRateLimiter(limit=600, window_seconds=60.0, clock=fake_clock)


@pytest.fixture
def fake_sleep() -> AsyncMock:
    """Records backoff waits without sleeping."""
    return AsyncMock(return_value=None)


# ============================================================================
# PRINTIFY CLIENT FIXTURES
# ============================================================================


@pytest.fixture
def make_client(rate_limiter, fake_sleep) -> Callable[..., PrintifyClient]:
    """
    Build a PrintifyClient whose HTTP traffic goes to `handler`.

    Usage:
        async with make_client(handler) as client:
            ...
    """

    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> PrintifyClient:
        return PrintifyClient(
            api_token="test-token",
            shop_id=SHOP_ID,
            rate_limiter=kwargs.pop("limiter", rate_limiter),
            base_url=BASE_URL,
            sleep=fake_sleep,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return _make


# ============================================================================
# DOMAIN FIXTURES
# ============================================================================


@pytest.fixture
def us_address() -> ShippingAddress:
    return ShippingAddress(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        country="US",
        region="CA",
        address1="1 Infinite Loop",
        city="Cupertino",
        zip="95014",
    )


@pytest.fixture
def mock_provider() -> AsyncMock:
    """Fulfillment provider double; catalog holds product 42 (variant 1 disabled, 2 enabled)."""
    provider = AsyncMock()
    provider.get_product.return_value = make_product()
    provider.quote_shipping.return_value = None
    provider.create_order.return_value = make_order()
    provider.get_order.return_value = make_order()
    provider.send_to_production.return_value = None
    provider.cancel_order.return_value = make_order(status=OrderStatus.CANCELED)
    provider.health_check.return_value = {"status": "healthy", "message": "ok", "details": {}}
    provider.rate_limit_status = Mock(
        return_value={"request_count": 0, "limit": 600, "remaining": 600, "window_seconds": 60.0, "is_limited": False}
    )
    return provider
