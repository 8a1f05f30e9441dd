"""Tests for RecordSaleUseCase."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from subsidiary_manager.application.dto.requests import RecordSaleRequest
from subsidiary_manager.application.use_cases.record_sale import RecordSaleUseCase
from subsidiary_manager.core.entities import InventoryItem, Sale
from subsidiary_manager.core.exceptions import (
    InsufficientStockError,
    InventoryItemNotFoundError,
)


@pytest.fixture
def mock_inventory_store():
    return AsyncMock()


@pytest.fixture
def mock_sales_store():
    store = AsyncMock()

    async def create_sale(sale: Sale) -> Sale:
        return sale.model_copy(update={"id": 99})

    store.create_sale.side_effect = create_sale
    return store


@pytest.fixture
def mock_activity_log_store():
    return AsyncMock()


@pytest.fixture
def use_case(mock_inventory_store, mock_sales_store, mock_activity_log_store):
    return RecordSaleUseCase(
        inventory_store=mock_inventory_store,
        sales_store=mock_sales_store,
        activity_log_store=mock_activity_log_store,
    )


@pytest.fixture
def widget():
    return InventoryItem(
        id=5,
        subsidiary_id=10,
        name="Widget",
        quantity=10,
        cost_price=Decimal("2.00"),
        sale_price=Decimal("3.50"),
    )


class TestRecordSaleUseCase:
    async def test_successful_sale(
        self, use_case, mock_inventory_store, mock_sales_store, staff_user, widget
    ):
        """Sale is built from the request and the item."""
        mock_inventory_store.get_inventory.return_value = widget

        result = await use_case.execute(10, staff_user, RecordSaleRequest(item_id=5, quantity=4))

        sale = mock_sales_store.create_sale.call_args[0][0]
        assert sale.subsidiary_id == 10
        assert sale.user_id == staff_user.id
        assert sale.quantity == 4
        assert result.sale.id == 99
        assert result.sale.total == Decimal("14.00")

    async def test_price_defaults_to_item_sale_price(
        self, use_case, mock_inventory_store, mock_sales_store, staff_user, widget
    ):
        mock_inventory_store.get_inventory.return_value = widget

        await use_case.execute(10, staff_user, RecordSaleRequest(item_id=5, quantity=1))

        assert mock_sales_store.create_sale.call_args[0][0].sale_price == Decimal("3.50")

    async def test_explicit_price_wins(
        self, use_case, mock_inventory_store, mock_sales_store, staff_user, widget
    ):
        mock_inventory_store.get_inventory.return_value = widget

        await use_case.execute(
            10, staff_user, RecordSaleRequest(item_id=5, quantity=1, sale_price=Decimal("3.00"))
        )

        assert mock_sales_store.create_sale.call_args[0][0].sale_price == Decimal("3.00")

    async def test_item_not_found(self, use_case, mock_inventory_store, mock_sales_store, staff_user):
        mock_inventory_store.get_inventory.return_value = None

        with pytest.raises(InventoryItemNotFoundError):
            await use_case.execute(10, staff_user, RecordSaleRequest(item_id=5, quantity=1))
        mock_sales_store.create_sale.assert_not_called()

    async def test_item_from_other_subsidiary(
        self, use_case, mock_inventory_store, mock_sales_store, staff_user, widget
    ):
        """Items of another tenant look missing."""
        mock_inventory_store.get_inventory.return_value = widget.model_copy(
            update={"subsidiary_id": 11}
        )

        with pytest.raises(InventoryItemNotFoundError):
            await use_case.execute(10, staff_user, RecordSaleRequest(item_id=5, quantity=1))
        mock_sales_store.create_sale.assert_not_called()

    async def test_insufficient_stock_is_not_logged(
        self,
        use_case,
        mock_inventory_store,
        mock_sales_store,
        mock_activity_log_store,
        staff_user,
        widget,
    ):
        mock_inventory_store.get_inventory.return_value = widget
        mock_sales_store.create_sale.side_effect = InsufficientStockError(5, 11, 10)

        with pytest.raises(InsufficientStockError):
            await use_case.execute(10, staff_user, RecordSaleRequest(item_id=5, quantity=11))
        mock_activity_log_store.create_activity_log.assert_not_called()

    async def test_activity_logged(
        self, use_case, mock_inventory_store, mock_activity_log_store, staff_user, widget
    ):
        mock_inventory_store.get_inventory.return_value = widget

        await use_case.execute(10, staff_user, RecordSaleRequest(item_id=5, quantity=2))

        entry = mock_activity_log_store.create_activity_log.call_args[0][0]
        assert entry.action == "sale_created"
        assert entry.subsidiary_id == 10
        assert entry.user_id == staff_user.id

    async def test_to_response(self, use_case, mock_inventory_store, staff_user, widget):
        mock_inventory_store.get_inventory.return_value = widget

        result = await use_case.execute(10, staff_user, RecordSaleRequest(item_id=5, quantity=2))
        response = use_case.to_response(result)

        assert response.id == 99
        assert response.total == Decimal("7.00")
