"""SQL implementation of sales storage, including the stock-decrementing sale."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from subsidiary_manager.config import get_logger
from subsidiary_manager.core.entities import Sale, utcnow
from subsidiary_manager.core.exceptions import (
    InsufficientStockError,
    InventoryItemNotFoundError,
    ValidationError,
)
from subsidiary_manager.core.interfaces import ISalesStore
from subsidiary_manager.infrastructure.storage.sql.base import SQLStore

logger = get_logger(__name__)

DECREMENT_STOCK = """
    UPDATE inventory
    SET quantity = quantity - ?, updated_at = ?
    WHERE id = ? AND quantity >= ?
"""


class SQLSalesStore(SQLStore, ISalesStore):
    """Append-only sales ledger."""

    table = "sales"

    async def create_sale(self, sale: Sale) -> Sale:
        """
        Record a sale and take its quantity out of stock.

        Both writes share one transaction. The decrement is conditional on
        enough stock remaining, so a concurrent sale that drained the item
        between our read and our update makes this one fail with
        InsufficientStockError and roll back its insert.
        """
        if sale.quantity <= 0:
            raise ValidationError("quantity", "Quantity must be positive", sale.quantity)
        if sale.sale_price < Decimal("0"):
            raise ValidationError("sale_price", "Price cannot be negative", sale.sale_price)

        async with self._db.transaction() as tx:
            item = await tx.fetch_one(
                "SELECT id, quantity FROM inventory WHERE id = ?", (sale.item_id,)
            )
            if item is None:
                raise InventoryItemNotFoundError(sale.item_id)
            if item["quantity"] < sale.quantity:
                raise InsufficientStockError(sale.item_id, sale.quantity, item["quantity"])

            row = await tx.insert("sales", sale.model_dump(exclude={"id"}))

            result = await tx.execute(
                DECREMENT_STOCK, (sale.quantity, utcnow(), sale.item_id, sale.quantity)
            )
            if result.rowcount == 0:
                logger.warning(
                    "sale_lost_stock_race",
                    item_id=sale.item_id,
                    requested=sale.quantity,
                )
                raise InsufficientStockError(sale.item_id, sale.quantity)

        created = Sale.model_validate(row)
        logger.info(
            "sale_recorded",
            sale_id=created.id,
            item_id=created.item_id,
            subsidiary_id=created.subsidiary_id,
            quantity=created.quantity,
        )
        return created

    async def list_sales_by_subsidiary(self, subsidiary_id: int) -> list[Sale]:
        rows = await self._db.fetch_all(
            "SELECT * FROM sales WHERE subsidiary_id = ? ORDER BY id", (subsidiary_id,)
        )
        return [Sale.model_validate(row) for row in rows]

    async def list_sales(self) -> list[Sale]:
        rows = await self._db.fetch_all("SELECT * FROM sales ORDER BY id")
        return [Sale.model_validate(row) for row in rows]

    async def list_sales_between(
        self,
        start: datetime,
        end: datetime,
        subsidiary_id: int | None = None,
    ) -> list[Sale]:
        sql = "SELECT * FROM sales WHERE timestamp >= ? AND timestamp <= ?"
        params: list[Any] = [start, end]
        if subsidiary_id is not None:
            sql += " AND subsidiary_id = ?"
            params.append(subsidiary_id)
        rows = await self._db.fetch_all(sql + " ORDER BY id", params)
        return [Sale.model_validate(row) for row in rows]
