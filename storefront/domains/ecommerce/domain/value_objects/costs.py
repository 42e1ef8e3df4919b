"""
Cost value objects: shipping quotes and order calculations.

All amounts are Money (integer cents).
"""

from dataclasses import dataclass, field

from storefront.core.domain import Money

from ..entities.cart import LineItem


@dataclass(frozen=True)
class ShippingOption:
    id: int
    name: str
    cost: Money


@dataclass(frozen=True)
class ShippingQuote:
    """Shipping price per service level for one shipment."""

    standard: Money
    express: Money | None = None
    priority: Money | None = None

    def options(self) -> list[ShippingOption]:
        """Selectable options, Standard first."""
        options = [ShippingOption(1, "Standard Shipping", self.standard)]
        if self.express is not None:
            options.append(ShippingOption(2, "Express Shipping", self.express))
        if self.priority is not None:
            options.append(ShippingOption(3, "Priority Shipping", self.priority))
        return options


@dataclass(frozen=True)
class OrderCalculation:
    line_items: list[LineItem]
    subtotal: Money
    shipping: Money
    tax: Money
    total: Money
    currency: str
    shipping_options: list[ShippingOption] = field(default_factory=list)
