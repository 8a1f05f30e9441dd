"""User domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from subsidiary_manager.core.entities.base import utcnow


class UserRole(str, Enum):
    """Access roles."""

    MHC_ADMIN = "mhc_admin"
    SUBSIDIARY_ADMIN = "subsidiary_admin"
    STAFF = "staff"


class User(BaseModel):
    """A login account. Password holds a salted bcrypt hash, never plaintext."""

    id: int | None = None
    username: str
    password: str
    role: UserRole = UserRole.STAFF
    subsidiary_id: int | None = None
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_mhc_admin(self) -> bool:
        return self.role == UserRole.MHC_ADMIN

    def can_access_subsidiary(self, subsidiary_id: int) -> bool:
        """MHC admins see every tenant; everyone else only their own."""
        return self.is_mhc_admin or self.subsidiary_id == subsidiary_id
