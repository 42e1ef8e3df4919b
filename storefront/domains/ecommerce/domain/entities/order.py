"""
Order Entity for E-commerce Domain

An order as the provider reports it. Status changes happen on the provider;
this entity only reflects the latest snapshot.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from storefront.core.domain import Money

from ..value_objects.order_status import OrderStatus


@dataclass(frozen=True)
class OrderLine:
    product_id: str
    variant_id: int
    quantity: int
    cost: Money = field(default_factory=Money.zero)
    shipping_cost: Money = field(default_factory=Money.zero)
    status: str | None = None


@dataclass
class Order:
    """
    Provider order snapshot.

    `raw_status` keeps the provider's text so unknown states are still
    reported faithfully even when `status` is UNKNOWN.
    """

    id: str
    status: OrderStatus = OrderStatus.UNKNOWN
    raw_status: str | None = None
    external_id: str | None = None
    label: str | None = None
    line_items: list[OrderLine] = field(default_factory=list)
    address_to: dict[str, Any] = field(default_factory=dict)
    total_price: Money = field(default_factory=Money.zero)
    total_shipping: Money = field(default_factory=Money.zero)
    total_tax: Money = field(default_factory=Money.zero)
    created_at: datetime | None = None
    sent_to_production_at: datetime | None = None
    fulfilled_at: datetime | None = None
    shipments: list[dict[str, Any]] = field(default_factory=list)
