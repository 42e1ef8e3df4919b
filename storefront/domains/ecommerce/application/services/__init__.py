"""
E-commerce Application Services
"""

from storefront.domains.ecommerce.application.services.catalog_validator import CatalogValidator
from storefront.domains.ecommerce.application.services.cost_estimator import CostEstimator
from storefront.domains.ecommerce.application.services.order_lifecycle import OrderLifecycleManager

__all__ = [
    "CatalogValidator",
    "CostEstimator",
    "OrderLifecycleManager",
]
