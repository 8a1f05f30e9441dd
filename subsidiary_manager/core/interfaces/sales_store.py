"""Abstract interface for sales storage."""

from abc import ABC, abstractmethod
from datetime import datetime

from subsidiary_manager.core.entities.sale import Sale


class ISalesStore(ABC):
    """Interface for sale persistence. Sales are append-only."""

    @abstractmethod
    async def create_sale(self, sale: Sale) -> Sale:
        """Insert a sale and decrement its item's stock atomically."""
        pass

    @abstractmethod
    async def list_sales_by_subsidiary(self, subsidiary_id: int) -> list[Sale]:
        """List sales of one subsidiary, in insertion order."""
        pass

    @abstractmethod
    async def list_sales(self) -> list[Sale]:
        """List every sale."""
        pass

    @abstractmethod
    async def list_sales_between(
        self,
        start: datetime,
        end: datetime,
        subsidiary_id: int | None = None,
    ) -> list[Sale]:
        """List sales with start <= timestamp <= end."""
        pass
