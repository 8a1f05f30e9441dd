"""Sale domain entity."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from subsidiary_manager.core.entities.base import to_cents, utcnow


class Sale(BaseModel):
    """A point-in-time sale of one inventory item. Immutable once created."""

    id: int | None = None
    subsidiary_id: int
    item_id: int
    user_id: int
    quantity: int
    sale_price: Decimal
    timestamp: datetime = Field(default_factory=utcnow)

    @field_validator("sale_price")
    @classmethod
    def round_price(cls, v: Decimal) -> Decimal:
        return to_cents(v)

    @property
    def total(self) -> Decimal:
        """Transaction value; computed on read, never stored."""
        return self.quantity * self.sale_price
