"""
E-commerce Domain Layer

This module contains:
- Entities: Product, Order, cart and line items
- Value Objects: OrderStatus, ShippingAddress, Estimate, cost quotes
- Domain Services: PricingService (fallback shipping, tax, totals)
- Exceptions: catalog and order lifecycle errors
"""

from storefront.domains.ecommerce.domain.entities import (
    CartItem,
    LineItem,
    Order,
    OrderLine,
    Page,
    Product,
    ProductImage,
    Variant,
)
from storefront.domains.ecommerce.domain.exceptions import (
    InvalidCartItemError,
    InvalidOrderDataError,
    InvalidOrderTransitionError,
    NoValidVariantError,
    OrderNotFoundError,
    ProductNotFoundError,
)
from storefront.domains.ecommerce.domain.services import PricingService
from storefront.domains.ecommerce.domain.value_objects import (
    Estimate,
    FallbackReason,
    OrderStatus,
    ShippingAddress,
)
from storefront.domains.ecommerce.domain.value_objects.costs import (
    OrderCalculation,
    ShippingOption,
    ShippingQuote,
)

__all__ = [
    # Entities
    "CartItem",
    "LineItem",
    "Order",
    "OrderLine",
    "Page",
    "Product",
    "ProductImage",
    "Variant",
    # Value Objects
    "Estimate",
    "FallbackReason",
    "OrderStatus",
    "ShippingAddress",
    "OrderCalculation",
    "ShippingOption",
    "ShippingQuote",
    # Services
    "PricingService",
    # Exceptions
    "InvalidCartItemError",
    "InvalidOrderDataError",
    "InvalidOrderTransitionError",
    "NoValidVariantError",
    "OrderNotFoundError",
    "ProductNotFoundError",
]
