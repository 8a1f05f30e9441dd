"""SQL implementation of inventory storage."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from subsidiary_manager.config import get_logger
from subsidiary_manager.core.entities import InventoryItem, StockTotals, utcnow
from subsidiary_manager.core.exceptions import InventoryItemNotFoundError, ValidationError
from subsidiary_manager.core.interfaces import IInventoryStore
from subsidiary_manager.infrastructure.storage.sql.base import SQLStore, require_text

logger = get_logger(__name__)


def check_stock_fields(values: dict[str, Any]) -> None:
    if "name" in values:
        require_text("name", values["name"])
    if "quantity" in values and int(values["quantity"]) < 0:
        raise ValidationError("quantity", "Quantity cannot be negative", values["quantity"])
    for field in ("cost_price", "sale_price"):
        if field in values and Decimal(str(values[field])) < 0:
            raise ValidationError(field, "Price cannot be negative", values[field])


class SQLInventoryStore(SQLStore, IInventoryStore):
    """Inventory items; quantity is the stock the sale transaction decrements."""

    table = "inventory"
    updatable = frozenset({"name", "quantity", "cost_price", "sale_price"})

    async def get_inventory(self, item_id: int) -> InventoryItem | None:
        row = await self._db.fetch_one("SELECT * FROM inventory WHERE id = ?", (item_id,))
        return InventoryItem.model_validate(row) if row else None

    async def list_inventory_by_subsidiary(self, subsidiary_id: int) -> list[InventoryItem]:
        rows = await self._db.fetch_all(
            "SELECT * FROM inventory WHERE subsidiary_id = ? ORDER BY id",
            (subsidiary_id,),
        )
        return [InventoryItem.model_validate(row) for row in rows]

    async def list_inventory(self) -> list[InventoryItem]:
        rows = await self._db.fetch_all("SELECT * FROM inventory ORDER BY id")
        return [InventoryItem.model_validate(row) for row in rows]

    async def list_inventory_updated_between(
        self,
        start: datetime,
        end: datetime,
        subsidiary_id: int | None = None,
    ) -> list[InventoryItem]:
        sql = "SELECT * FROM inventory WHERE updated_at >= ? AND updated_at <= ?"
        params: list[Any] = [start, end]
        if subsidiary_id is not None:
            sql += " AND subsidiary_id = ?"
            params.append(subsidiary_id)
        rows = await self._db.fetch_all(sql + " ORDER BY id", params)
        return [InventoryItem.model_validate(row) for row in rows]

    async def create_inventory(self, item: InventoryItem) -> InventoryItem:
        values = item.model_dump(exclude={"id"})
        check_stock_fields(values)

        now = utcnow()
        values["created_at"] = now
        values["updated_at"] = now
        row = await self._db.insert("inventory", values)

        created = InventoryItem.model_validate(row)
        logger.info(
            "inventory_item_created",
            item_id=created.id,
            subsidiary_id=created.subsidiary_id,
            quantity=created.quantity,
        )
        return created

    async def update_inventory(self, item_id: int, changes: dict[str, Any]) -> InventoryItem:
        check_stock_fields(changes)
        # updated_at moves on every write, including an empty patch
        sql, params = self._update_statement(item_id, changes, updated_at=utcnow())

        async with self._db.transaction() as tx:
            result = await tx.execute(sql, params)
            if result.rowcount == 0:
                raise InventoryItemNotFoundError(item_id)
            row = await tx.fetch_one("SELECT * FROM inventory WHERE id = ?", (item_id,))

        logger.info("inventory_item_updated", item_id=item_id, fields=sorted(changes))
        return InventoryItem.model_validate(row)

    async def delete_inventory(self, item_id: int) -> None:
        result = await self._db.execute("DELETE FROM inventory WHERE id = ?", (item_id,))
        if result.rowcount == 0:
            raise InventoryItemNotFoundError(item_id)
        logger.info("inventory_item_deleted", item_id=item_id)

    async def total_stock(self) -> StockTotals:
        row = await self._db.fetch_one(
            """
            SELECT
                COUNT(*) AS items,
                COALESCE(SUM(quantity), 0) AS quantity,
                COALESCE(SUM(quantity * cost_price), 0) AS value
            FROM inventory
            """
        )
        return StockTotals(
            items=int(row["items"]),
            quantity=int(row["quantity"]),
            value=Decimal(str(row["value"])),
        )
