"""
Ecommerce Application Ports

Interface definitions (ports) for the Ecommerce domain.
Uses Protocol for structural typing.
"""

from typing import Any, Protocol, runtime_checkable

from storefront.domains.ecommerce.domain.entities import LineItem, Order, Page, Product
from storefront.domains.ecommerce.domain.value_objects import ShippingAddress
from storefront.domains.ecommerce.domain.value_objects.costs import ShippingQuote


@runtime_checkable
class IFulfillmentProvider(Protocol):
    """
    Interface for the print-on-demand fulfillment provider.

    Provider failures surface as the provider's own error types; missing
    products and orders as ProductNotFoundError / OrderNotFoundError.
    """

    async def get_product(self, product_id: str) -> Product:
        """Get product by ID"""
        ...

    async def list_products(self, page: int = 1, limit: int = 10) -> Page[Product]:
        """List shop products"""
        ...

    async def quote_shipping(self, line_items: list[LineItem], address: ShippingAddress) -> ShippingQuote | None:
        """Quote shipping; None when the provider gives no standard rate"""
        ...

    async def create_order(
        self,
        line_items: list[LineItem],
        address: ShippingAddress,
        external_id: str,
        label: str,
        send_shipping_notification: bool = True,
    ) -> Order:
        """Create a draft order"""
        ...

    async def get_order(self, order_id: str) -> Order:
        """Get order by ID"""
        ...

    async def list_orders(self, page: int = 1, limit: int = 10) -> Page[Order]:
        """List shop orders"""
        ...

    async def send_to_production(self, order_id: str) -> None:
        """Submit a draft order for production"""
        ...

    async def cancel_order(self, order_id: str) -> Order:
        """Cancel an order"""
        ...

    async def health_check(self) -> dict[str, Any]:
        """Check provider connectivity"""
        ...

    def rate_limit_status(self) -> dict[str, Any]:
        """Current outbound rate limit window"""
        ...


__all__ = ["IFulfillmentProvider"]
