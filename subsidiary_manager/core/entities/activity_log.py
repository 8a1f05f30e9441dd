"""Activity log domain entity."""

from datetime import datetime

from pydantic import BaseModel, Field

from subsidiary_manager.core.entities.base import utcnow


class ActivityLog(BaseModel):
    """Append-only audit record."""

    id: int | None = None
    subsidiary_id: int | None = None
    user_id: int | None = None
    action: str
    details: str = ""
    timestamp: datetime = Field(default_factory=utcnow)
