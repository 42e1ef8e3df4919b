"""
E-commerce Domain Value Objects
"""

from .address import REQUIRED_ADDRESS_FIELDS, ShippingAddress
from .estimate import Estimate, FallbackReason
from .order_status import OrderStatus

__all__ = [
    "REQUIRED_ADDRESS_FIELDS",
    "Estimate",
    "FallbackReason",
    "OrderStatus",
    "ShippingAddress",
]
