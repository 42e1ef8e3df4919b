"""
Printify API Client

Async client for the Printify print-on-demand REST API using Bearer Token auth.

Connection Details:
    - Base URL: https://api.printify.com/v1
    - Auth: Bearer Token (personal access token)
    - Limit: 600 requests per minute, enforced locally before each attempt

Endpoints:
    - GET  /shops/{shop_id}/products.json - List products
    - GET  /shops/{shop_id}/products/{id}.json - Get a product
    - POST /shops/{shop_id}/orders/shipping.json - Quote shipping
    - POST /shops/{shop_id}/orders.json - Create an order
    - GET  /shops/{shop_id}/orders.json - List orders
    - GET  /shops/{shop_id}/orders/{id}.json - Get an order
    - POST /shops/{shop_id}/orders/{id}/send_to_production.json - Send to production
    - POST /shops/{shop_id}/orders/{id}/cancel.json - Cancel an unpaid order

Documentation:
    - https://developers.printify.com/
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError
from tenacity import AsyncRetrying, RetryCallState, before_sleep_log, retry_if_exception, stop_after_attempt

from storefront.config.settings import Settings, get_settings
from storefront.core.domain import ConfigurationError
from storefront.models.printify import (
    PrintifyError,
    PrintifyNetworkError,
    PrintifyOrder,
    PrintifyOrdersResponse,
    PrintifyProduct,
    PrintifyProductsResponse,
    PrintifyRateLimitError,
    PrintifyResponseError,
    PrintifyShippingRates,
    PrintifyTimeoutError,
    PrintifyTransientError,
    error_from_response,
)
from storefront.utils.rate_limiter import RateLimitExceeded, RateLimitWindow, WindowRateLimiter

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
SleepFunc = Callable[[float], Awaitable[Any]]


def backoff_delay(attempt: int, base: float = 2.0) -> float:
    """Seconds to wait after the given failed attempt (1-based): 2s, 4s, 8s..."""
    return base**attempt


def _is_retryable(error: BaseException) -> bool:
    """Server errors, timeouts, dropped connections and upstream 429s."""
    return isinstance(error, PrintifyError) and error.retryable


class PrintifyClient:
    """
    Async HTTP client for the Printify API.

    Every attempt, retries included, is counted by the shared rate limiter
    before it is sent. Errors are raised as `PrintifyError` subclasses.

    Example:
        async with PrintifyClient(api_token, shop_id, rate_limiter) as client:
            product = await client.get_product("5d39b159e7c48c000728c89f")
    """

    BASE_URL = "https://api.printify.com/v1"

    def __init__(
        self,
        api_token: str | None,
        shop_id: str | None,
        rate_limiter: WindowRateLimiter,
        base_url: str | None = None,
        timeout: float = 45.0,
        max_retries: int = 3,
        user_agent: str = "SDFM-Store/1.0",
        sleep: SleepFunc = asyncio.sleep,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            api_token: Printify personal access token
            shop_id: Printify shop identifier
            rate_limiter: Process-wide window limiter shared by all clients
            base_url: API base URL override
            timeout: Per-request timeout in seconds
            max_retries: Attempts per request in `request_with_retry`
            user_agent: User-Agent header value
            sleep: Awaitable sleep used for backoff waits
            transport: Optional httpx transport (mock transports in tests)

        Raises:
            ConfigurationError: If the token or the shop id is missing
        """
        if not api_token:
            raise ConfigurationError("PRINTIFY_API_TOKEN", "PRINTIFY_API_TOKEN environment variable is required")
        if not shop_id:
            raise ConfigurationError("PRINTIFY_SHOP_ID", "PRINTIFY_SHOP_ID environment variable is required")

        self._api_token = api_token
        self.shop_id = shop_id
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._user_agent = user_agent
        self._rate_limiter = rate_limiter
        self._sleep = sleep
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> PrintifyClient:
        """Enter async context and create HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self._api_token}",
                "Content-Type": "application/json",
                "User-Agent": self._user_agent,
            },
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args) -> None:
        """Exit async context and close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # =========================================================================
    # Transport
    # =========================================================================

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send a single request to Printify.

        Returns:
            Decoded JSON body (empty dict for an empty body)

        Raises:
            RateLimitExceeded: Local window is full, nothing was sent
            PrintifyError: Any upstream, timeout or transport failure
        """
        if not self._client:
            raise PrintifyError("CLIENT_NOT_INITIALIZED", "Client not initialized. Use 'async with' context.")

        self._rate_limiter.check_and_consume()
        window = self._rate_limiter.status()
        logger.info(
            f"Printify {method} {endpoint} "
            f"(rate window {window.request_count}/{window.limit})"
        )

        try:
            response = await self._client.request(method, endpoint, json=body, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"Printify timeout on {method} {endpoint}: {e}")
            raise PrintifyTimeoutError(self._timeout) from e
        except httpx.ConnectError as e:
            logger.error(f"Printify connection error on {method} {endpoint}: {e}")
            raise PrintifyNetworkError(str(e)) from e
        except httpx.TransportError as e:
            logger.error(f"Printify transport error on {method} {endpoint}: {e}")
            raise PrintifyTransientError(str(e)) from e

        logger.debug(f"Printify response status: {response.status_code}")

        if response.is_error:
            error_body = self._decode_error_body(response)
            logger.error(
                f"Printify API error: {method} {endpoint} -> {response.status_code} "
                f"body={error_body} request={body}"
            )
            raise error_from_response(response.status_code, error_body)

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise PrintifyResponseError(str(e)) from e

    async def request_with_retry(
        self,
        endpoint: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        max_retries: int | None = None,
    ) -> Any:
        """
        Send a request, retrying transient failures.

        Server errors, timeouts and dropped connections back off exponentially
        (`backoff_delay`); a 429 waits one full rate window. Client errors,
        DNS/connection failures and the local limiter propagate immediately.

        Args:
            endpoint: Path relative to the API base URL
            method: HTTP method
            body: JSON body
            params: Query parameters
            max_retries: Total attempts (defaults to the client setting)

        Returns:
            Decoded JSON body

        Raises:
            PrintifyError: Last failure once attempts are exhausted
            ValueError: max_retries below 1
        """
        attempts = self._max_retries if max_retries is None else max_retries
        if attempts < 1:
            raise ValueError("max_retries must be at least 1")

        retrying = AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(attempts),
            wait=self._retry_wait,
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return await retrying(self.request, endpoint, method, body, params)

    def _retry_wait(self, retry_state: RetryCallState) -> float:
        """One full rate window after a 429, exponential backoff otherwise."""
        if isinstance(retry_state.outcome.exception(), PrintifyRateLimitError):
            return self._rate_limiter.window_seconds
        return backoff_delay(retry_state.attempt_number)

    # =========================================================================
    # Catalog
    # =========================================================================

    async def get_products(self, page: int = 1, limit: int = 10) -> PrintifyProductsResponse:
        data = await self.request_with_retry(
            f"/shops/{self.shop_id}/products.json", params={"page": page, "limit": limit}
        )
        return self._parse(PrintifyProductsResponse, data)

    async def get_product(self, product_id: str) -> PrintifyProduct:
        data = await self.request_with_retry(f"/shops/{self.shop_id}/products/{product_id}.json")
        return self._parse(PrintifyProduct, data)

    # =========================================================================
    # Orders
    # =========================================================================

    async def calculate_shipping(
        self, line_items: list[dict[str, Any]], address: dict[str, Any]
    ) -> PrintifyShippingRates:
        """Quote shipping for a set of line items, amounts in cents."""
        data = await self.request_with_retry(
            f"/shops/{self.shop_id}/orders/shipping.json",
            method="POST",
            body={"line_items": line_items, "address_to": address},
        )
        return self._parse(PrintifyShippingRates, data)

    async def create_order(self, payload: dict[str, Any]) -> PrintifyOrder:
        data = await self.request_with_retry(f"/shops/{self.shop_id}/orders.json", method="POST", body=payload)
        return self._parse(PrintifyOrder, data)

    async def get_order(self, order_id: str) -> PrintifyOrder:
        data = await self.request_with_retry(f"/shops/{self.shop_id}/orders/{order_id}.json")
        return self._parse(PrintifyOrder, data)

    async def get_orders(self, page: int = 1, limit: int = 10) -> PrintifyOrdersResponse:
        data = await self.request_with_retry(
            f"/shops/{self.shop_id}/orders.json", params={"page": page, "limit": limit}
        )
        return self._parse(PrintifyOrdersResponse, data)

    async def send_to_production(self, order_id: str) -> dict[str, Any]:
        return await self.request_with_retry(
            f"/shops/{self.shop_id}/orders/{order_id}/send_to_production.json", method="POST"
        )

    async def cancel_order(self, order_id: str) -> dict[str, Any]:
        return await self.request_with_retry(f"/shops/{self.shop_id}/orders/{order_id}/cancel.json", method="POST")

    # =========================================================================
    # Diagnostics
    # =========================================================================

    async def health_check(self) -> dict[str, Any]:
        """
        Check connectivity with a single, non-retried catalog request.

        Returns:
            dict with status ("healthy"/"unhealthy"), message and details
        """
        try:
            data = await self.request(f"/shops/{self.shop_id}/products.json", params={"limit": 1})
            return {
                "status": "healthy",
                "message": "Printify API is accessible",
                "details": {"product_count": data.get("total", 0), "shop_id": self.shop_id},
            }
        except (PrintifyError, RateLimitExceeded) as e:
            logger.error(f"Printify health check failed: {e}")
            return {
                "status": "unhealthy",
                "message": str(e),
                "details": {"shop_id": self.shop_id},
            }

    def rate_limit_status(self) -> RateLimitWindow:
        return self._rate_limiter.status()

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _decode_error_body(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            return {"message": f"HTTP {response.status_code}: {response.reason_phrase}"}
        return data if isinstance(data, dict) else {"message": str(data)}

    @staticmethod
    def _parse(model: type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Error parsing Printify {model.__name__}: {e.errors()}")
            raise PrintifyResponseError(f"{model.__name__}: {e.error_count()} validation errors") from e


class PrintifyClientFactory:
    """Factory para crear instancias del cliente Printify"""

    @staticmethod
    def create_client(
        rate_limiter: WindowRateLimiter,
        settings: Settings | None = None,
        sleep: SleepFunc | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> PrintifyClient:
        """
        Build a client from settings.

        Raises:
            ConfigurationError: If credentials are not configured
        """
        settings = settings or get_settings()
        return PrintifyClient(
            api_token=settings.PRINTIFY_API_TOKEN,
            shop_id=settings.PRINTIFY_SHOP_ID,
            rate_limiter=rate_limiter,
            base_url=settings.PRINTIFY_API_BASE_URL,
            timeout=settings.PRINTIFY_TIMEOUT,
            max_retries=settings.PRINTIFY_MAX_RETRIES,
            user_agent=settings.PRINTIFY_USER_AGENT,
            sleep=sleep or asyncio.sleep,
            transport=transport,
        )
