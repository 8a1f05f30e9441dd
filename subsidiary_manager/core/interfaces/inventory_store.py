"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from subsidiary_manager.core.entities.inventory import InventoryItem, StockTotals


class IInventoryStore(ABC):
    """Interface for inventory item persistence."""

    @abstractmethod
    async def get_inventory(self, item_id: int) -> InventoryItem | None:
        """Get inventory item by ID."""
        pass

    @abstractmethod
    async def list_inventory_by_subsidiary(self, subsidiary_id: int) -> list[InventoryItem]:
        """List items owned by one subsidiary, in insertion order."""
        pass

    @abstractmethod
    async def list_inventory(self) -> list[InventoryItem]:
        """List every inventory item."""
        pass

    @abstractmethod
    async def list_inventory_updated_between(
        self,
        start: datetime,
        end: datetime,
        subsidiary_id: int | None = None,
    ) -> list[InventoryItem]:
        """List items with start <= updated_at <= end."""
        pass

    @abstractmethod
    async def create_inventory(self, item: InventoryItem) -> InventoryItem:
        """Create a new inventory item."""
        pass

    @abstractmethod
    async def update_inventory(self, item_id: int, changes: dict[str, Any]) -> InventoryItem:
        """Apply a partial update; raises InventoryItemNotFoundError."""
        pass

    @abstractmethod
    async def delete_inventory(self, item_id: int) -> None:
        """Hard-delete an item; raises InventoryItemNotFoundError."""
        pass

    @abstractmethod
    async def total_stock(self) -> StockTotals:
        """Aggregate item count, quantity and value at cost."""
        pass
