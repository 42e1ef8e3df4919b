"""
Pricing Service for E-commerce Domain

Client-side shipping estimate and tax rules used when the provider cannot
quote, plus the totals of an order calculation. All arithmetic is in cents.
"""

from decimal import Decimal

from storefront.core.domain import Money

from ..entities.cart import LineItem
from ..value_objects.costs import OrderCalculation, ShippingQuote

# Standard shipping for the first unit, per destination country (cents)
SHIPPING_TIERS: dict[str, int] = {
    "US": 500,
    "CA": 800,
    "GB": 1200,
    "DE": 1200,
    "FR": 1200,
    "IT": 1200,
    "ES": 1200,
    "NL": 1200,
    "BE": 1200,
    "AT": 1200,
    "CH": 1200,
    "IE": 1200,
    "PT": 1200,
    "AU": 1500,
    "NZ": 1500,
}
DEFAULT_SHIPPING_RATE = 1800
ADDITIONAL_ITEM_RATE = 200
EXPRESS_MULTIPLIER = Decimal("2.5")
US_SALES_TAX_RATE = Decimal("0.08")
DEFAULT_ITEM_PRICE = 2000


class PricingService:
    """
    Domain service for fallback shipping, tax and order totals.

    Tax is a flat 8% approximation for US destinations and zero elsewhere;
    real tax is whatever the provider charges on the order.

    Example:
        ```python
        service = PricingService()
        quote = service.fallback_shipping("US", unit_count=3)
        quote.standard.cents  # 900
        ```
    """

    def __init__(self, currency: str = "USD"):
        self.currency = currency

    def base_shipping_rate(self, country: str | None) -> Money:
        code = (country or "").strip().upper()
        return Money(SHIPPING_TIERS.get(code, DEFAULT_SHIPPING_RATE), self.currency)

    def fallback_shipping(self, country: str | None, unit_count: int) -> ShippingQuote:
        """Tier-table quote: base + 2.00 per extra unit, express at 2.5x standard."""
        base = self.base_shipping_rate(country)
        extra_units = max(0, unit_count - 1)
        standard = base.add(Money(ADDITIONAL_ITEM_RATE * extra_units, self.currency))
        return ShippingQuote(standard=standard, express=standard.scale(EXPRESS_MULTIPLIER))

    def calculate_tax(self, subtotal: Money, country: str | None) -> Money:
        if (country or "").strip().upper() != "US":
            return Money.zero(subtotal.currency)
        return subtotal.scale(US_SALES_TAX_RATE)

    def calculate_subtotal(self, line_items: list[LineItem]) -> Money:
        """Sum of unit cost x quantity. Items without a known cost count as zero."""
        return Money.sum(
            [item.subtotal for item in line_items if item.subtotal is not None],
            self.currency,
        )

    def summarize(
        self,
        line_items: list[LineItem],
        shipping_quote: ShippingQuote,
        country: str | None,
    ) -> OrderCalculation:
        subtotal = self.calculate_subtotal(line_items)
        shipping = shipping_quote.standard
        tax = self.calculate_tax(subtotal, country)
        return OrderCalculation(
            line_items=list(line_items),
            subtotal=subtotal,
            shipping=shipping,
            tax=tax,
            total=subtotal.add(shipping).add(tax),
            currency=self.currency,
            shipping_options=shipping_quote.options(),
        )

    @staticmethod
    def unit_count(line_items: list[LineItem]) -> int:
        return sum(item.quantity for item in line_items)
