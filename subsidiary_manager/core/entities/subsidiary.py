"""Subsidiary domain entity."""

from datetime import datetime

from pydantic import BaseModel, Field

from subsidiary_manager.core.entities.base import utcnow


class Subsidiary(BaseModel):
    """A tenant business unit with its own inventory, sales and staff."""

    id: int | None = None
    name: str
    tax_id: str
    email: str
    phone_number: str
    logo: str | None = None  # path or URL
    address: str | None = None
    city: str | None = None
    country: str | None = None
    status: bool = True  # active / inactive
    created_at: datetime = Field(default_factory=utcnow)
