"""Abstract interfaces for user, subsidiary, activity log and session storage."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from subsidiary_manager.core.entities import ActivityLog, AuthSession, Subsidiary, User


class IUserStore(ABC):
    """Interface for user persistence."""

    @abstractmethod
    async def get_user(self, user_id: int) -> User | None:
        """Get user by ID."""
        pass

    @abstractmethod
    async def get_user_by_username(self, username: str) -> User | None:
        """Get user by unique username."""
        pass

    @abstractmethod
    async def create_user(self, user: User) -> User:
        """Create a user; raises DuplicateUsernameError."""
        pass

    @abstractmethod
    async def list_users(self) -> list[User]:
        """List every user."""
        pass

    @abstractmethod
    async def list_users_by_subsidiary(self, subsidiary_id: int) -> list[User]:
        """List users belonging to one subsidiary."""
        pass

    @abstractmethod
    async def update_user(self, user_id: int, changes: dict[str, Any]) -> User:
        """Apply a partial update; raises UserNotFoundError."""
        pass

    @abstractmethod
    async def delete_user(self, user_id: int) -> None:
        """Hard-delete a user; raises UserNotFoundError."""
        pass


class ISubsidiaryStore(ABC):
    """Interface for subsidiary persistence."""

    @abstractmethod
    async def get_subsidiary(self, subsidiary_id: int) -> Subsidiary | None:
        """Get subsidiary by ID."""
        pass

    @abstractmethod
    async def list_subsidiaries(self) -> list[Subsidiary]:
        """List every subsidiary, in insertion order."""
        pass

    @abstractmethod
    async def create_subsidiary(self, subsidiary: Subsidiary) -> Subsidiary:
        """Create a subsidiary; raises ValidationError or DuplicateTaxIdError."""
        pass

    @abstractmethod
    async def update_subsidiary(self, subsidiary_id: int, changes: dict[str, Any]) -> Subsidiary:
        """Apply a partial update, including status toggles."""
        pass


class IActivityLogStore(ABC):
    """Interface for the append-only activity log."""

    @abstractmethod
    async def create_activity_log(self, log: ActivityLog) -> ActivityLog:
        """Append a log entry."""
        pass

    @abstractmethod
    async def list_activity_logs(self, subsidiary_id: int | None = None) -> list[ActivityLog]:
        """List entries, optionally for one subsidiary, in insertion order."""
        pass

    @abstractmethod
    async def list_activity_logs_between(
        self,
        start: datetime,
        end: datetime,
        subsidiary_id: int | None = None,
    ) -> list[ActivityLog]:
        """List entries with start <= timestamp <= end."""
        pass


class ISessionStore(ABC):
    """Interface for authentication session persistence."""

    @abstractmethod
    async def get(self, sid: str) -> AuthSession | None:
        """Get a live session; expired sessions read as missing."""
        pass

    @abstractmethod
    async def set(self, session: AuthSession) -> None:
        """Create or replace a session."""
        pass

    @abstractmethod
    async def destroy(self, sid: str) -> None:
        """Remove a session if present."""
        pass

    @abstractmethod
    async def touch(self, sid: str, expires_at: datetime) -> None:
        """Extend a session's expiry."""
        pass

    @abstractmethod
    async def prune_expired(self) -> int:
        """Delete expired sessions, returning how many were removed."""
        pass
