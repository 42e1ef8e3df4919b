"""
E-commerce Domain Entities
"""

from storefront.domains.ecommerce.domain.entities.cart import CartItem, LineItem
from storefront.domains.ecommerce.domain.entities.order import Order, OrderLine
from storefront.domains.ecommerce.domain.entities.page import Page
from storefront.domains.ecommerce.domain.entities.product import Product, ProductImage, Variant

__all__ = [
    "CartItem",
    "LineItem",
    "Order",
    "OrderLine",
    "Page",
    "Product",
    "ProductImage",
    "Variant",
]
