"""
E-commerce Domain Services
"""

from storefront.domains.ecommerce.domain.services.pricing_service import (
    DEFAULT_ITEM_PRICE,
    DEFAULT_SHIPPING_RATE,
    SHIPPING_TIERS,
    PricingService,
)

__all__ = [
    "DEFAULT_ITEM_PRICE",
    "DEFAULT_SHIPPING_RATE",
    "SHIPPING_TIERS",
    "PricingService",
]
