"""
In-process session storage.

Sessions live in a dict and are lost on restart. Expired entries are
dropped when read, and the whole table is swept at most once per check
period.
"""

import asyncio
from datetime import datetime, timedelta

from subsidiary_manager.config import get_logger
from subsidiary_manager.core.entities import AuthSession, utcnow
from subsidiary_manager.core.interfaces import ISessionStore

logger = get_logger(__name__)


class MemorySessionStore(ISessionStore):
    """Dict-backed session store guarded by an asyncio.Lock."""

    def __init__(self, check_period_seconds: int = 86400):
        self._sessions: dict[str, AuthSession] = {}
        self._lock = asyncio.Lock()
        self._check_period = timedelta(seconds=check_period_seconds)
        self._last_sweep = utcnow()

    def __len__(self) -> int:
        return len(self._sessions)

    async def get(self, sid: str) -> AuthSession | None:
        async with self._lock:
            self._maybe_sweep()
            session = self._sessions.get(sid)
            if session is None:
                return None
            if session.is_expired():
                del self._sessions[sid]
                return None
            return session.model_copy(deep=True)

    async def set(self, session: AuthSession) -> None:
        async with self._lock:
            self._maybe_sweep()
            self._sessions[session.sid] = session.model_copy(deep=True)

    async def destroy(self, sid: str) -> None:
        async with self._lock:
            self._sessions.pop(sid, None)

    async def touch(self, sid: str, expires_at: datetime) -> None:
        async with self._lock:
            session = self._sessions.get(sid)
            if session is not None:
                session.expires_at = expires_at

    async def prune_expired(self) -> int:
        async with self._lock:
            return self._sweep()

    def _maybe_sweep(self) -> None:
        if utcnow() - self._last_sweep >= self._check_period:
            self._sweep()

    def _sweep(self) -> int:
        now = utcnow()
        expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
        for sid in expired:
            del self._sessions[sid]
        self._last_sweep = now
        if expired:
            logger.info("sessions_pruned", count=len(expired))
        return len(expired)
