"""
Calculate Checkout Use Case

Best-effort order cost for the checkout page. Never fails once the request
itself is valid: provider trouble degrades to client-side estimates.
"""

import logging
from dataclasses import dataclass, field

from storefront.core.domain import ValidationException
from storefront.domains.ecommerce.application.services import CatalogValidator, CostEstimator
from storefront.domains.ecommerce.domain.entities import CartItem
from storefront.domains.ecommerce.domain.exceptions import InvalidCartItemError
from storefront.domains.ecommerce.domain.value_objects import FallbackReason, ShippingAddress
from storefront.domains.ecommerce.domain.value_objects.costs import OrderCalculation

logger = logging.getLogger(__name__)


@dataclass
class CalculateCheckoutRequest:
    """Request for a checkout calculation."""

    cart_items: list[CartItem]
    shipping_address: ShippingAddress | None


@dataclass
class CalculateCheckoutResponse:
    """Calculated totals and the reasons any part of them is an estimate."""

    calculation: OrderCalculation
    fallback_reasons: list[FallbackReason] = field(default_factory=list)

    @property
    def fallback_used(self) -> bool:
        return bool(self.fallback_reasons)


class CalculateCheckoutUseCase:
    """
    Use Case: Calculate Checkout

    Responsibilities:
    - Resolve each cart item against the catalog (lenient)
    - Quote shipping, falling back to the tier table
    - Compute subtotal, tax and total
    """

    def __init__(self, catalog_validator: CatalogValidator, cost_estimator: CostEstimator):
        self.catalog_validator = catalog_validator
        self.cost_estimator = cost_estimator

    async def execute(self, request: CalculateCheckoutRequest) -> CalculateCheckoutResponse:
        """
        Raises:
            ValidationException: Empty cart or missing shipping address
            InvalidCartItemError: Quantity missing or not a positive integer
        """
        if not request.cart_items:
            raise ValidationException("Cart is empty", field="cartItems")
        if request.shipping_address is None:
            raise ValidationException("Shipping address is required", field="shippingAddress")
        for item in request.cart_items:
            if isinstance(item.quantity, bool) or not isinstance(item.quantity, int) or item.quantity <= 0:
                raise InvalidCartItemError(
                    item.product_id or None,
                    f"Invalid quantity for product {item.display_name}",
                    field="quantity",
                )

        address = request.shipping_address
        try:
            resolved = await self.catalog_validator.resolve_all_lenient(request.cart_items)
            line_items = [estimate.value for estimate in resolved]
            reasons = [estimate.fallback_reason for estimate in resolved if estimate.fallback_reason]

            cost = await self.cost_estimator.estimate_order_cost(line_items, address)
            if cost.fallback_reason:
                reasons.append(cost.fallback_reason)

            calculation = cost.value
        except Exception as e:
            logger.exception(f"Checkout calculation failed, using client-side estimate: {e}")
            line_items = [self.catalog_validator.fallback_line_item(item) for item in request.cart_items]
            calculation = self.cost_estimator.fallback_order_cost(line_items, address)
            reasons = [FallbackReason.CALCULATION_ERROR]

        unique_reasons = list(dict.fromkeys(reasons))
        logger.info(
            f"Checkout calculated: total={calculation.total.cents} cents, "
            f"fallback={[r.value for r in unique_reasons]}"
        )
        return CalculateCheckoutResponse(calculation=calculation, fallback_reasons=unique_reasons)
