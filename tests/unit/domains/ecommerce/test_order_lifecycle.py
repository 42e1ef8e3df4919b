"""
Tests for OrderLifecycleManager.
"""

import pytest

from storefront.core.domain import Money
from storefront.domains.ecommerce.application.services import OrderLifecycleManager
from storefront.domains.ecommerce.domain import (
    InvalidOrderDataError,
    InvalidOrderTransitionError,
    LineItem,
    Order,
    OrderStatus,
    ShippingAddress,
)
from storefront.models.printify import PrintifyServerError
from tests.factories import make_order


@pytest.fixture
def lifecycle(mock_provider):
    return OrderLifecycleManager(mock_provider)


@pytest.fixture
def line_items():
    return [LineItem("42", 2, 3, Money(2000))]


class TestCreateOrder:
    @pytest.mark.asyncio
    async def test_creates_with_shipping_notification(self, lifecycle, mock_provider, line_items, us_address):
        order = await lifecycle.create_order(line_items, us_address, external_id="SDFM-1", label="SDFM Order")

        assert order.id == "ord-1"
        mock_provider.create_order.assert_awaited_once_with(
            line_items,
            us_address,
            external_id="SDFM-1",
            label="SDFM Order",
            send_shipping_notification=True,
        )

    @pytest.mark.asyncio
    async def test_refetches_when_provider_returns_only_an_id(self, lifecycle, mock_provider, line_items, us_address):
        mock_provider.create_order.return_value = Order(id="ord-9")
        mock_provider.get_order.return_value = make_order("ord-9", OrderStatus.ON_HOLD)

        order = await lifecycle.create_order(line_items, us_address, external_id="SDFM-1", label="x")

        assert order.status == OrderStatus.ON_HOLD
        mock_provider.get_order.assert_awaited_once_with("ord-9")

    @pytest.mark.asyncio
    async def test_refetch_failure_keeps_created_order(self, lifecycle, mock_provider, line_items, us_address):
        mock_provider.create_order.return_value = Order(id="ord-9")
        mock_provider.get_order.side_effect = PrintifyServerError(503, "down")

        order = await lifecycle.create_order(line_items, us_address, external_id="SDFM-1", label="x")

        assert order.id == "ord-9"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "items,field",
        [
            ([], "line_items"),
            ([LineItem("42", 2, 0)], "quantity"),
            ([LineItem("", 2, 1)], "product_id"),
            ([LineItem("42", None, 1)], "variant_id"),
        ],
    )
    async def test_rejects_invalid_items_without_calling_provider(
        self, lifecycle, mock_provider, us_address, items, field
    ):
        with pytest.raises(InvalidOrderDataError) as exc_info:
            await lifecycle.create_order(items, us_address, external_id="SDFM-1", label="x")

        assert exc_info.value.field == field
        mock_provider.create_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_missing_address(self, lifecycle, mock_provider, line_items):
        with pytest.raises(InvalidOrderDataError) as exc_info:
            await lifecycle.create_order(line_items, None, external_id="SDFM-1", label="x")

        assert exc_info.value.field == "shippingAddress"
        mock_provider.create_order.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_missing_address_field(self, lifecycle, mock_provider, line_items):
        address = ShippingAddress(first_name="Ada", last_name="L", country="US")

        with pytest.raises(InvalidOrderDataError) as exc_info:
            await lifecycle.create_order(line_items, address, external_id="SDFM-1", label="x")

        assert exc_info.value.field == "email"
        assert exc_info.value.details["missing_fields"] == ["email", "address1", "city", "state", "zipCode"]


class TestSubmitForProduction:
    @pytest.mark.asyncio
    async def test_draft_is_submitted_and_refetched(self, lifecycle, mock_provider):
        mock_provider.get_order.side_effect = [
            make_order(status=OrderStatus.DRAFT),
            make_order(status=OrderStatus.SENDING_TO_PRODUCTION),
        ]

        order = await lifecycle.submit_for_production("ord-1")

        mock_provider.send_to_production.assert_awaited_once_with("ord-1")
        assert order.status == OrderStatus.SENDING_TO_PRODUCTION

    @pytest.mark.asyncio
    async def test_failed_reread_keeps_last_known_order(self, lifecycle, mock_provider):
        mock_provider.get_order.side_effect = [
            make_order(status=OrderStatus.DRAFT),
            PrintifyServerError(503, "unavailable"),
        ]

        order = await lifecycle.submit_for_production("ord-1")

        mock_provider.send_to_production.assert_awaited_once_with("ord-1")
        assert order.id == "ord-1"
        assert order.status == OrderStatus.DRAFT

    @pytest.mark.asyncio
    async def test_failed_submission_still_raises(self, lifecycle, mock_provider):
        mock_provider.get_order.return_value = make_order(status=OrderStatus.DRAFT)
        mock_provider.send_to_production.side_effect = PrintifyServerError(500, "boom")

        with pytest.raises(PrintifyServerError):
            await lifecycle.submit_for_production("ord-1")

        assert mock_provider.get_order.await_count == 1

    @pytest.mark.asyncio
    async def test_pending_order_is_not_submitted(self, lifecycle, mock_provider):
        mock_provider.get_order.return_value = make_order(status=OrderStatus.PENDING)

        with pytest.raises(InvalidOrderTransitionError) as exc_info:
            await lifecycle.submit_for_production("ord-1")

        assert "pending payment" in exc_info.value.message
        mock_provider.send_to_production.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [OrderStatus.IN_PRODUCTION, OrderStatus.SHIPPED, OrderStatus.DELIVERED])
    async def test_progressed_order_is_not_submitted(self, lifecycle, mock_provider, status):
        mock_provider.get_order.return_value = make_order(status=status)

        with pytest.raises(InvalidOrderTransitionError) as exc_info:
            await lifecycle.submit_for_production("ord-1")

        assert "already progressed" in exc_info.value.message
        mock_provider.send_to_production.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [OrderStatus.CANCELED, OrderStatus.ON_HOLD, OrderStatus.UNKNOWN])
    async def test_other_states_cannot_be_sent(self, lifecycle, mock_provider, status):
        mock_provider.get_order.return_value = make_order(status=status)

        with pytest.raises(InvalidOrderTransitionError) as exc_info:
            await lifecycle.submit_for_production("ord-1")

        assert "cannot be sent to production" in exc_info.value.message
        mock_provider.send_to_production.assert_not_called()


class TestCancelAndRead:
    @pytest.mark.asyncio
    async def test_cancel_delegates_to_provider(self, lifecycle, mock_provider):
        order = await lifecycle.cancel_order("ord-1")

        assert order.status == OrderStatus.CANCELED
        mock_provider.cancel_order.assert_awaited_once_with("ord-1")

    @pytest.mark.asyncio
    async def test_cancel_errors_surface(self, lifecycle, mock_provider):
        mock_provider.cancel_order.side_effect = PrintifyServerError(500, "boom")

        with pytest.raises(PrintifyServerError):
            await lifecycle.cancel_order("ord-1")

    @pytest.mark.asyncio
    async def test_list_orders(self, lifecycle, mock_provider):
        await lifecycle.list_orders(page=2, limit=5)
        mock_provider.list_orders.assert_awaited_once_with(page=2, limit=5)
