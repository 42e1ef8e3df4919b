"""
Order Lifecycle Manager

Creates orders on the provider, submits drafts for production and cancels.
Status lives on the provider; every decision re-reads it first.
"""

import logging

from storefront.domains.ecommerce.application.ports import IFulfillmentProvider
from storefront.domains.ecommerce.domain.entities import LineItem, Order, Page
from storefront.domains.ecommerce.domain.exceptions import InvalidOrderDataError, InvalidOrderTransitionError
from storefront.domains.ecommerce.domain.value_objects import OrderStatus, ShippingAddress
from storefront.models.printify import PrintifyError
from storefront.utils.rate_limiter import RateLimitExceeded

logger = logging.getLogger(__name__)


class OrderLifecycleManager:
    def __init__(self, provider: IFulfillmentProvider):
        self.provider = provider

    async def create_order(
        self,
        line_items: list[LineItem],
        address: ShippingAddress | None,
        external_id: str,
        label: str,
    ) -> Order:
        """
        Create a draft order with shipping notification enabled.

        Raises:
            InvalidOrderDataError: Payload rejected before any provider call
        """
        self.validate_order_data(line_items, address)

        order = await self.provider.create_order(
            line_items,
            address,
            external_id=external_id,
            label=label,
            send_shipping_notification=True,
        )
        logger.info(f"Printify order created: {order.id} ({external_id})")

        # orders.json only returns the id
        if order.status == OrderStatus.UNKNOWN and not order.line_items:
            order = await self._refresh(order)
        return order

    async def submit_for_production(self, order_id: str) -> Order:
        """
        Send a draft order to production and return the refreshed order.

        Once the provider accepted the submission, a failed re-read returns the
        last known snapshot instead of raising.

        Raises:
            InvalidOrderTransitionError: The order is not a draft
        """
        order = await self.provider.get_order(order_id)
        status = order.status

        if status == OrderStatus.PENDING:
            raise InvalidOrderTransitionError(
                order_id, status.value, "Order is pending payment and cannot be sent to production"
            )
        if status.is_in_production_or_later():
            raise InvalidOrderTransitionError(
                order_id, status.value, f"Order has already progressed to '{status.value}'"
            )
        if not status.can_be_sent_to_production():
            raise InvalidOrderTransitionError(
                order_id,
                order.raw_status or status.value,
                f"Order in status '{order.raw_status or status.value}' cannot be sent to production",
            )

        await self.provider.send_to_production(order_id)
        logger.info(f"Order {order_id} sent to production")
        return await self._refresh(order)

    async def cancel_order(self, order_id: str) -> Order:
        """The provider decides whether cancellation is allowed."""
        order = await self.provider.cancel_order(order_id)
        logger.info(f"Order {order_id} cancel requested, status now {order.status.value}")
        return order

    async def get_order(self, order_id: str) -> Order:
        return await self.provider.get_order(order_id)

    async def list_orders(self, page: int = 1, limit: int = 10) -> Page[Order]:
        return await self.provider.list_orders(page=page, limit=limit)

    @staticmethod
    def validate_order_data(line_items: list[LineItem], address: ShippingAddress | None) -> None:
        if not line_items:
            raise InvalidOrderDataError("Order must contain at least one line item", field="line_items")
        if address is None:
            raise InvalidOrderDataError("Shipping address is required", field="shippingAddress")

        for item in line_items:
            if not item.product_id:
                raise InvalidOrderDataError("Line item is missing a product id", field="product_id")
            if item.variant_id is None:
                raise InvalidOrderDataError(
                    f"Line item for product {item.product_id} is missing a variant id", field="variant_id"
                )
            if item.quantity <= 0:
                raise InvalidOrderDataError(
                    f"Invalid quantity {item.quantity} for product {item.product_id}", field="quantity"
                )

        missing = address.missing_fields()
        if missing:
            raise InvalidOrderDataError(
                f"Missing required field: {missing[0]}",
                field=missing[0],
                details={"missing_fields": missing},
            )

    async def _refresh(self, order: Order) -> Order:
        """Re-read the order; keep the known snapshot if the provider cannot answer."""
        try:
            return await self.provider.get_order(order.id)
        except (PrintifyError, RateLimitExceeded) as e:
            logger.warning(f"Could not refresh order {order.id}, keeping last known state: {e}")
            return order
