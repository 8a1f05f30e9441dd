"""Authentication session entity."""

from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field

from subsidiary_manager.core.entities.base import utcnow


class AuthSession(BaseModel):
    """Server-side state behind a session cookie."""

    sid: str
    user_id: int
    data: dict[str, Any] = Field(default_factory=dict)
    expires_at: datetime
    created_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def start(cls, sid: str, user_id: int, ttl_seconds: int) -> "AuthSession":
        now = utcnow()
        return cls(
            sid=sid,
            user_id=user_id,
            expires_at=now + timedelta(seconds=ttl_seconds),
            created_at=now,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) >= self.expires_at
