"""
E-commerce API Dependencies

FastAPI dependencies for the e-commerce domain. One Printify client per
request, sharing the application-wide rate limiter held on app.state.
"""

from collections.abc import AsyncIterator

from fastapi import Depends, Request

from storefront.clients import PrintifyClientFactory
from storefront.config.settings import Settings, get_settings
from storefront.domains.ecommerce.application.ports import IFulfillmentProvider
from storefront.domains.ecommerce.application.services import (
    CatalogValidator,
    CostEstimator,
    OrderLifecycleManager,
)
from storefront.domains.ecommerce.application.use_cases import (
    CalculateCheckoutUseCase,
    CancelOrderUseCase,
    GetOrderUseCase,
    GetProductUseCase,
    ListOrdersUseCase,
    ListProductsUseCase,
    PlaceOrderUseCase,
    ProviderStatusUseCase,
    SubmitOrderUseCase,
)
from storefront.domains.ecommerce.domain.services import PricingService
from storefront.domains.ecommerce.infrastructure import PrintifyFulfillmentProvider
from storefront.utils.rate_limiter import WindowRateLimiter


def get_rate_limiter(request: Request) -> WindowRateLimiter:
    """Shared outbound rate limiter created at startup."""
    return request.app.state.rate_limiter


async def get_fulfillment_provider(
    rate_limiter: WindowRateLimiter = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[IFulfillmentProvider]:
    """Get a Printify-backed provider; the HTTP client closes after the request."""
    async with PrintifyClientFactory.create_client(rate_limiter, settings) as client:
        yield PrintifyFulfillmentProvider(client, currency=settings.STORE_CURRENCY)


def get_calculate_checkout_use_case(
    provider: IFulfillmentProvider = Depends(get_fulfillment_provider),
    settings: Settings = Depends(get_settings),
) -> CalculateCheckoutUseCase:
    """Get CalculateCheckoutUseCase instance."""
    return CalculateCheckoutUseCase(
        CatalogValidator(provider, currency=settings.STORE_CURRENCY),
        CostEstimator(provider, PricingService(currency=settings.STORE_CURRENCY)),
    )


def get_place_order_use_case(
    provider: IFulfillmentProvider = Depends(get_fulfillment_provider),
    settings: Settings = Depends(get_settings),
) -> PlaceOrderUseCase:
    """Get PlaceOrderUseCase instance."""
    return PlaceOrderUseCase(
        CatalogValidator(provider, currency=settings.STORE_CURRENCY),
        OrderLifecycleManager(provider),
        external_id_prefix=settings.ORDER_EXTERNAL_ID_PREFIX,
        submit_delay_seconds=settings.PRODUCTION_SUBMIT_DELAY_SECONDS,
    )


def get_order_lifecycle(provider: IFulfillmentProvider = Depends(get_fulfillment_provider)) -> OrderLifecycleManager:
    return OrderLifecycleManager(provider)


def get_submit_order_use_case(lifecycle: OrderLifecycleManager = Depends(get_order_lifecycle)) -> SubmitOrderUseCase:
    return SubmitOrderUseCase(lifecycle)


def get_cancel_order_use_case(lifecycle: OrderLifecycleManager = Depends(get_order_lifecycle)) -> CancelOrderUseCase:
    return CancelOrderUseCase(lifecycle)


def get_order_use_case(lifecycle: OrderLifecycleManager = Depends(get_order_lifecycle)) -> GetOrderUseCase:
    return GetOrderUseCase(lifecycle)


def get_list_orders_use_case(lifecycle: OrderLifecycleManager = Depends(get_order_lifecycle)) -> ListOrdersUseCase:
    return ListOrdersUseCase(lifecycle)


def get_list_products_use_case(
    provider: IFulfillmentProvider = Depends(get_fulfillment_provider),
) -> ListProductsUseCase:
    return ListProductsUseCase(provider)


def get_product_use_case(provider: IFulfillmentProvider = Depends(get_fulfillment_provider)) -> GetProductUseCase:
    return GetProductUseCase(provider)


def get_provider_status_use_case(
    provider: IFulfillmentProvider = Depends(get_fulfillment_provider),
) -> ProviderStatusUseCase:
    return ProviderStatusUseCase(provider)


__all__ = [
    "get_rate_limiter",
    "get_fulfillment_provider",
    "get_calculate_checkout_use_case",
    "get_place_order_use_case",
    "get_order_lifecycle",
    "get_submit_order_use_case",
    "get_cancel_order_use_case",
    "get_order_use_case",
    "get_list_orders_use_case",
    "get_list_products_use_case",
    "get_product_use_case",
    "get_provider_status_use_case",
]
