"""
E-commerce Infrastructure Layer
"""

from storefront.domains.ecommerce.infrastructure.printify_provider import PrintifyFulfillmentProvider

__all__ = ["PrintifyFulfillmentProvider"]
