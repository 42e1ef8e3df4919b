"""
Shipping & Cost Estimator

Provider shipping quote first, tier table when the provider cannot quote.
"""

import logging

from storefront.domains.ecommerce.application.ports import IFulfillmentProvider
from storefront.domains.ecommerce.application.services.fallbacks import RECOVERABLE_ERRORS, reason_for_error
from storefront.domains.ecommerce.domain.entities import LineItem
from storefront.domains.ecommerce.domain.services import PricingService
from storefront.domains.ecommerce.domain.value_objects import Estimate, FallbackReason, ShippingAddress
from storefront.domains.ecommerce.domain.value_objects.costs import OrderCalculation, ShippingOption, ShippingQuote

logger = logging.getLogger(__name__)


class CostEstimator:
    """
    Estimate shipping and order totals.

    Example:
        ```python
        estimator = CostEstimator(provider, PricingService())
        estimate = await estimator.estimate_order_cost(line_items, address)
        if estimate.used_fallback:
            logger.warning(estimate.fallback_reason)
        ```
    """

    def __init__(self, provider: IFulfillmentProvider, pricing_service: PricingService):
        self.provider = provider
        self.pricing = pricing_service

    async def estimate_shipping(self, line_items: list[LineItem], address: ShippingAddress) -> Estimate[ShippingQuote]:
        try:
            quote = await self.provider.quote_shipping(line_items, address)
        except RECOVERABLE_ERRORS as e:
            reason = reason_for_error(e)
            logger.warning(f"Shipping quote failed ({reason.value}), using tier table: {e}")
            return Estimate.fallback(self._tier_quote(line_items, address), reason)

        if quote is None:
            return Estimate.fallback(self._tier_quote(line_items, address), FallbackReason.INVALID_RESPONSE)
        return Estimate.authoritative(quote)

    async def estimate_order_cost(
        self, line_items: list[LineItem], address: ShippingAddress
    ) -> Estimate[OrderCalculation]:
        shipping = await self.estimate_shipping(line_items, address)
        calculation = self.pricing.summarize(line_items, shipping.value, address.country_code)
        return Estimate(calculation, shipping.fallback_reason)

    def fallback_order_cost(self, line_items: list[LineItem], address: ShippingAddress) -> OrderCalculation:
        """Totals computed entirely client-side."""
        return self.pricing.summarize(line_items, self._tier_quote(line_items, address), address.country_code)

    @staticmethod
    def shipping_options(quote: ShippingQuote) -> list[ShippingOption]:
        return quote.options()

    def _tier_quote(self, line_items: list[LineItem], address: ShippingAddress) -> ShippingQuote:
        return self.pricing.fallback_shipping(address.country_code, PricingService.unit_count(line_items))
