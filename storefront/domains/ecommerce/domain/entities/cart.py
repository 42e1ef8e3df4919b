"""
Cart and Line Item Entities

A CartItem is what the shopper asked for; a LineItem is what will actually be
ordered from the provider after catalog validation.
"""

from dataclasses import dataclass
from typing import Any

from storefront.core.domain import Money


@dataclass
class CartItem:
    """
    Item from the shopper's cart.

    `unit_price` is the price the storefront displayed, used only as a
    fallback when the catalog cannot be reached.
    """

    product_id: str
    quantity: int
    variant_id: int | None = None
    unit_price: Money | None = None
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.product_id


@dataclass(frozen=True)
class LineItem:
    """Validated order line sent to the provider."""

    product_id: str
    variant_id: int
    quantity: int
    unit_cost: Money | None = None

    @property
    def subtotal(self) -> Money | None:
        if self.unit_cost is None:
            return None
        return self.unit_cost.multiply(self.quantity)

    def to_provider_payload(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "variant_id": self.variant_id,
            "quantity": self.quantity,
        }
