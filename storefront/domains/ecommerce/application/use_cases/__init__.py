"""
E-commerce Use Cases

Application layer use cases for the storefront checkout and order flows.
"""

from storefront.domains.ecommerce.application.use_cases.calculate_checkout import (
    CalculateCheckoutRequest,
    CalculateCheckoutResponse,
    CalculateCheckoutUseCase,
)
from storefront.domains.ecommerce.application.use_cases.get_products import GetProductUseCase, ListProductsUseCase
from storefront.domains.ecommerce.application.use_cases.manage_order import (
    CancelOrderUseCase,
    GetOrderUseCase,
    ListOrdersUseCase,
    SubmitOrderUseCase,
)
from storefront.domains.ecommerce.application.use_cases.place_order import (
    PlaceOrderRequest,
    PlaceOrderResponse,
    PlaceOrderUseCase,
)
from storefront.domains.ecommerce.application.use_cases.provider_status import ProviderStatusUseCase

__all__ = [
    "CalculateCheckoutRequest",
    "CalculateCheckoutResponse",
    "CalculateCheckoutUseCase",
    "PlaceOrderRequest",
    "PlaceOrderResponse",
    "PlaceOrderUseCase",
    "SubmitOrderUseCase",
    "CancelOrderUseCase",
    "GetOrderUseCase",
    "ListOrdersUseCase",
    "ListProductsUseCase",
    "GetProductUseCase",
    "ProviderStatusUseCase",
]
