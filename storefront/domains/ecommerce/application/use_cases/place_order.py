"""
Place Order Use Case

Validates the checkout strictly, creates the provider order and optionally
sends it to production.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date

from storefront.core.domain import DomainException
from storefront.domains.ecommerce.application.services import CatalogValidator, OrderLifecycleManager
from storefront.domains.ecommerce.domain.entities import CartItem, Order
from storefront.domains.ecommerce.domain.exceptions import InvalidCartItemError, InvalidOrderDataError
from storefront.domains.ecommerce.domain.value_objects import ShippingAddress
from storefront.models.printify import PrintifyError
from storefront.utils.rate_limiter import RateLimitExceeded

logger = logging.getLogger(__name__)


@dataclass
class PlaceOrderRequest:
    """Request for placing an order."""

    cart_items: list[CartItem]
    shipping_address: ShippingAddress | None
    process_payment: bool = True


@dataclass
class PlaceOrderResponse:
    """Created order and whether it reached production."""

    order: Order
    payment_processed: bool
    message: str
    submission_error: str | None = None


class PlaceOrderUseCase:
    """
    Use Case: Place Order

    Responsibilities:
    - Validate every address field and cart item (400 on failure)
    - Resolve items strictly against the catalog
    - Create the order on the provider
    - Optionally wait for the order to settle and submit it for production

    Creation and submission are independent calls; a failed submission
    leaves a draft behind that can be resumed later.
    """

    def __init__(
        self,
        catalog_validator: CatalogValidator,
        order_lifecycle: OrderLifecycleManager,
        external_id_prefix: str = "SDFM",
        submit_delay_seconds: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self.catalog_validator = catalog_validator
        self.order_lifecycle = order_lifecycle
        self.external_id_prefix = external_id_prefix
        self.submit_delay_seconds = submit_delay_seconds
        self._sleep = sleep
        self._clock = clock

    async def execute(self, request: PlaceOrderRequest) -> PlaceOrderResponse:
        """
        Place the order.

        Raises:
            InvalidOrderDataError / InvalidCartItemError / NoValidVariantError: 400-class input errors
            PrintifyError: Provider failures during creation
        """
        address = self._validate(request)

        line_items = await self.catalog_validator.resolve_all(request.cart_items, strict=True)

        order = await self.order_lifecycle.create_order(
            line_items,
            address,
            external_id=self._external_id(),
            label=f"{self.external_id_prefix} Store Order - {date.today().isoformat()}",
        )

        if not request.process_payment:
            return PlaceOrderResponse(
                order=order,
                payment_processed=False,
                message="Order created as draft",
            )

        await self._sleep(self.submit_delay_seconds)
        try:
            order = await self.order_lifecycle.submit_for_production(order.id)
        except (DomainException, PrintifyError, RateLimitExceeded) as e:
            logger.error(f"Order {order.id} created but not sent to production: {e}")
            return PlaceOrderResponse(
                order=order,
                payment_processed=False,
                message=f"Order created but could not be sent to production: {e}",
                submission_error=str(e),
            )

        return PlaceOrderResponse(
            order=order,
            payment_processed=True,
            message="Order placed and sent to production",
        )

    def _external_id(self) -> str:
        return f"{self.external_id_prefix}-{int(self._clock() * 1000)}"

    @staticmethod
    def _validate(request: PlaceOrderRequest) -> ShippingAddress:
        if not request.cart_items:
            raise InvalidOrderDataError("Cart is empty", field="cartItems")

        address = request.shipping_address
        if address is None:
            raise InvalidOrderDataError("Shipping address is required", field="shippingAddress")

        missing = address.missing_fields()
        if missing:
            raise InvalidOrderDataError(
                f"Missing required field: {missing[0]}",
                field=missing[0],
                details={"missing_fields": missing},
            )

        for item in request.cart_items:
            if not item.product_id:
                raise InvalidCartItemError(None, "Cart item is missing a product id", field="id")
            if isinstance(item.quantity, bool) or not isinstance(item.quantity, int) or item.quantity <= 0:
                raise InvalidCartItemError(
                    item.product_id,
                    f"Invalid quantity for product {item.display_name}",
                    field="quantity",
                )
        return address
