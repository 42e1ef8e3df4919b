"""
Printify fulfillment provider adapter.

Implements IFulfillmentProvider on top of PrintifyClient, translating the
validated response schemas into domain entities.
"""

import logging
from datetime import datetime
from typing import Any

from storefront.clients import PrintifyClient
from storefront.core.domain import Money
from storefront.domains.ecommerce.domain.entities import (
    LineItem,
    Order,
    OrderLine,
    Page,
    Product,
    ProductImage,
    Variant,
)
from storefront.domains.ecommerce.domain.exceptions import OrderNotFoundError, ProductNotFoundError
from storefront.domains.ecommerce.domain.value_objects import OrderStatus, ShippingAddress
from storefront.domains.ecommerce.domain.value_objects.costs import ShippingQuote
from storefront.models.printify import (
    PrintifyNotFoundError,
    PrintifyOrder,
    PrintifyProduct,
)

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable Printify timestamp: {value}")
        return None


class PrintifyFulfillmentProvider:
    """
    Printify-backed fulfillment provider.

    Example:
        ```python
        async with PrintifyClientFactory.create_client(limiter) as client:
            provider = PrintifyFulfillmentProvider(client)
            product = await provider.get_product("5d39b1...")
        ```
    """

    def __init__(self, client: PrintifyClient, currency: str = "USD"):
        self.client = client
        self.currency = currency

    async def get_product(self, product_id: str) -> Product:
        try:
            raw = await self.client.get_product(product_id)
        except PrintifyNotFoundError as e:
            raise ProductNotFoundError(product_id) from e
        return self._to_product(raw)

    async def list_products(self, page: int = 1, limit: int = 10) -> Page[Product]:
        response = await self.client.get_products(page=page, limit=limit)
        return Page(
            items=[self._to_product(p) for p in response.data],
            current_page=response.current_page,
            last_page=response.last_page,
            total=response.total,
            per_page=response.per_page,
        )

    async def quote_shipping(self, line_items: list[LineItem], address: ShippingAddress) -> ShippingQuote | None:
        rates = await self.client.calculate_shipping(
            [item.to_provider_payload() for item in line_items],
            address.to_provider_payload(),
        )
        if rates.standard is None:
            logger.warning("Printify shipping quote has no standard rate")
            return None
        return ShippingQuote(
            standard=Money(rates.standard, self.currency),
            express=self._money(rates.express),
            priority=self._money(rates.priority),
        )

    async def create_order(
        self,
        line_items: list[LineItem],
        address: ShippingAddress,
        external_id: str,
        label: str,
        send_shipping_notification: bool = True,
    ) -> Order:
        payload = {
            "external_id": external_id,
            "label": label,
            "line_items": [item.to_provider_payload() for item in line_items],
            "shipping_method": 1,
            "send_shipping_notification": send_shipping_notification,
            "address_to": address.to_provider_payload(),
        }
        raw = await self.client.create_order(payload)
        return self._to_order(raw)

    async def get_order(self, order_id: str) -> Order:
        try:
            raw = await self.client.get_order(order_id)
        except PrintifyNotFoundError as e:
            raise OrderNotFoundError(order_id) from e
        return self._to_order(raw)

    async def list_orders(self, page: int = 1, limit: int = 10) -> Page[Order]:
        response = await self.client.get_orders(page=page, limit=limit)
        return Page(
            items=[self._to_order(o) for o in response.data],
            current_page=response.current_page,
            last_page=response.last_page,
            total=response.total,
            per_page=response.per_page,
        )

    async def send_to_production(self, order_id: str) -> None:
        try:
            await self.client.send_to_production(order_id)
        except PrintifyNotFoundError as e:
            raise OrderNotFoundError(order_id) from e

    async def cancel_order(self, order_id: str) -> Order:
        try:
            data = await self.client.cancel_order(order_id)
        except PrintifyNotFoundError as e:
            raise OrderNotFoundError(order_id) from e
        if isinstance(data, dict) and data.get("id"):
            return self._to_order(PrintifyClient._parse(PrintifyOrder, data))
        return await self.get_order(order_id)

    async def health_check(self) -> dict[str, Any]:
        return await self.client.health_check()

    def rate_limit_status(self) -> dict[str, Any]:
        window = self.client.rate_limit_status()
        return {
            "request_count": window.request_count,
            "limit": window.limit,
            "remaining": window.remaining,
            "window_seconds": window.window_seconds,
            "is_limited": window.is_limited,
        }

    # =========================================================================
    # Mapping
    # =========================================================================

    def _money(self, cents: int | None) -> Money | None:
        return Money(cents, self.currency) if cents is not None else None

    def _to_product(self, raw: PrintifyProduct) -> Product:
        return Product(
            id=raw.id,
            title=raw.title,
            description=raw.description,
            tags=list(raw.tags),
            variants=[
                Variant(
                    id=v.id,
                    price=Money(v.price, self.currency),
                    is_enabled=v.is_enabled,
                    is_available=v.is_available,
                    title=v.title or "",
                    sku=v.sku,
                    is_default=v.is_default,
                    options=list(v.options),
                )
                for v in raw.variants
            ],
            images=[
                ProductImage(
                    src=i.src,
                    variant_ids=list(i.variant_ids),
                    position=i.position,
                    is_default=i.is_default,
                )
                for i in raw.images
            ],
            options=[o.model_dump() for o in raw.options],
            visible=raw.visible,
            blueprint_id=raw.blueprint_id,
            print_provider_id=raw.print_provider_id,
            created_at=_parse_timestamp(raw.created_at),
            updated_at=_parse_timestamp(raw.updated_at),
        )

    def _to_order(self, raw: PrintifyOrder) -> Order:
        return Order(
            id=raw.id,
            status=OrderStatus.parse(raw.status),
            raw_status=raw.status,
            external_id=raw.external_id,
            label=raw.label,
            line_items=[
                OrderLine(
                    product_id=li.product_id,
                    variant_id=li.variant_id,
                    quantity=li.quantity,
                    cost=Money(li.cost, self.currency),
                    shipping_cost=Money(li.shipping_cost, self.currency),
                    status=li.status,
                )
                for li in raw.line_items
            ],
            address_to=dict(raw.address_to),
            total_price=Money(raw.total_price, self.currency),
            total_shipping=Money(raw.total_shipping, self.currency),
            total_tax=Money(raw.total_tax, self.currency),
            created_at=_parse_timestamp(raw.created_at),
            sent_to_production_at=_parse_timestamp(raw.sent_to_production_at),
            fulfilled_at=_parse_timestamp(raw.fulfilled_at),
            shipments=list(raw.shipments),
        )
