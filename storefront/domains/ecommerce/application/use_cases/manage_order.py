"""
Order Management Use Cases

Submit, cancel and read provider orders.
"""

import logging

from storefront.domains.ecommerce.application.services import OrderLifecycleManager
from storefront.domains.ecommerce.domain.entities import Order, Page

logger = logging.getLogger(__name__)


class SubmitOrderUseCase:
    """Send an existing draft order to production (resumes a failed checkout)."""

    def __init__(self, order_lifecycle: OrderLifecycleManager):
        self.order_lifecycle = order_lifecycle

    async def execute(self, order_id: str) -> Order:
        return await self.order_lifecycle.submit_for_production(order_id)


class CancelOrderUseCase:
    def __init__(self, order_lifecycle: OrderLifecycleManager):
        self.order_lifecycle = order_lifecycle

    async def execute(self, order_id: str) -> Order:
        return await self.order_lifecycle.cancel_order(order_id)


class GetOrderUseCase:
    def __init__(self, order_lifecycle: OrderLifecycleManager):
        self.order_lifecycle = order_lifecycle

    async def execute(self, order_id: str) -> Order:
        """
        Raises:
            OrderNotFoundError: Unknown order id
        """
        return await self.order_lifecycle.get_order(order_id)


class ListOrdersUseCase:
    def __init__(self, order_lifecycle: OrderLifecycleManager):
        self.order_lifecycle = order_lifecycle

    async def execute(self, page: int = 1, limit: int = 10) -> Page[Order]:
        orders = await self.order_lifecycle.list_orders(page=page, limit=limit)
        logger.info(f"Retrieved {len(orders.items)} orders (page {orders.current_page}/{orders.last_page})")
        return orders
