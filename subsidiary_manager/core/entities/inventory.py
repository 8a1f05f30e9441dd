"""Inventory domain entities."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from subsidiary_manager.core.entities.base import to_cents, utcnow


class InventoryItem(BaseModel):
    """Stock of one product held by a subsidiary."""

    id: int | None = None
    subsidiary_id: int
    name: str
    quantity: int = 0
    cost_price: Decimal = Decimal("0.00")
    sale_price: Decimal = Decimal("0.00")
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("cost_price", "sale_price")
    @classmethod
    def round_price(cls, v: Decimal) -> Decimal:
        # SQLite hands NUMERIC back without its scale
        return to_cents(v)

    @property
    def stock_value(self) -> Decimal:
        """Value of the stock on hand at cost."""
        return self.quantity * self.cost_price


class StockTotals(BaseModel):
    """Aggregate stock across every subsidiary."""

    items: int = 0
    quantity: int = 0
    value: Decimal = Decimal("0.00")

    @field_validator("value")
    @classmethod
    def round_value(cls, v: Decimal) -> Decimal:
        return to_cents(v)
