"""SQL implementation of authentication session storage."""

import json
from datetime import datetime

from subsidiary_manager.config import get_logger
from subsidiary_manager.core.entities import AuthSession, utcnow
from subsidiary_manager.core.interfaces import ISessionStore
from subsidiary_manager.infrastructure.storage.sql.base import SQLStore

logger = get_logger(__name__)


class SQLSessionStore(SQLStore, ISessionStore):
    """Sessions persisted in the `sessions` table; they survive restarts."""

    table = "sessions"

    async def get(self, sid: str) -> AuthSession | None:
        row = await self._db.fetch_one("SELECT * FROM sessions WHERE sid = ?", (sid,))
        if row is None:
            return None

        session = self._row_to_session(row)
        if session.is_expired():
            await self.destroy(sid)
            return None
        return session

    async def set(self, session: AuthSession) -> None:
        # Portable upsert
        async with self._db.transaction() as tx:
            await tx.execute("DELETE FROM sessions WHERE sid = ?", (session.sid,))
            await tx.execute(
                """
                INSERT INTO sessions (sid, user_id, data, expires_at, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    session.sid,
                    session.user_id,
                    json.dumps(session.data),
                    session.expires_at,
                    session.created_at,
                ),
            )

    async def destroy(self, sid: str) -> None:
        await self._db.execute("DELETE FROM sessions WHERE sid = ?", (sid,))

    async def touch(self, sid: str, expires_at: datetime) -> None:
        await self._db.execute(
            "UPDATE sessions SET expires_at = ? WHERE sid = ?", (expires_at, sid)
        )

    async def prune_expired(self) -> int:
        result = await self._db.execute(
            "DELETE FROM sessions WHERE expires_at <= ?", (utcnow(),)
        )
        if result.rowcount:
            logger.info("sessions_pruned", count=result.rowcount)
        return result.rowcount

    def _row_to_session(self, row: dict) -> AuthSession:
        return AuthSession(
            sid=row["sid"],
            user_id=row["user_id"],
            data=json.loads(row["data"] or "{}"),
            expires_at=row["expires_at"],
            created_at=row["created_at"],
        )
