"""
E-commerce domain errors.
"""

from typing import Any

from storefront.core.domain import (
    EntityNotFoundException,
    InvalidOperationException,
    ValidationException,
)


class ProductNotFoundError(EntityNotFoundException):
    def __init__(self, product_id: str):
        super().__init__("Product", product_id, f"Product {product_id} not found")
        self.product_id = product_id


class OrderNotFoundError(EntityNotFoundException):
    def __init__(self, order_id: str):
        super().__init__("Order", order_id, f"Order {order_id} not found")
        self.order_id = order_id


class NoValidVariantError(ValidationException):
    """Raised when a product has no enabled variant usable for the cart item."""

    def __init__(self, product_id: str, requested_variant_id: int | None = None, message: str | None = None):
        if message is None:
            if requested_variant_id is not None:
                message = f"Variant {requested_variant_id} of product {product_id} is not available"
            else:
                message = f"Product {product_id} has no available variants"
        super().__init__(
            message,
            field="variantId",
            details={"product_id": product_id, "requested_variant_id": requested_variant_id},
            code="NO_VALID_VARIANT",
        )
        self.product_id = product_id
        self.requested_variant_id = requested_variant_id


class InvalidOrderDataError(ValidationException):
    """Order payload rejected before any provider call."""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message, field=field, details=details, code="INVALID_ORDER_DATA")


class InvalidCartItemError(ValidationException):
    """A cart item that cannot be ordered (unknown product, bad quantity...)."""

    def __init__(self, product_id: str | None, message: str, field: str | None = None):
        super().__init__(
            message,
            field=field,
            details={"product_id": product_id},
            code="INVALID_CART_ITEM",
        )
        self.product_id = product_id


class InvalidOrderTransitionError(InvalidOperationException):
    def __init__(self, order_id: str, current_state: str, message: str | None = None):
        super().__init__("send_to_production", current_state, message)
        self.order_id = order_id
        self.details["order_id"] = order_id
