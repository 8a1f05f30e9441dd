"""SQL implementation of the activity log."""

from datetime import datetime
from typing import Any

from subsidiary_manager.core.entities import ActivityLog
from subsidiary_manager.core.interfaces import IActivityLogStore
from subsidiary_manager.infrastructure.storage.sql.base import SQLStore


class SQLActivityLogStore(SQLStore, IActivityLogStore):
    """Append-only audit trail."""

    table = "activity_logs"

    async def create_activity_log(self, log: ActivityLog) -> ActivityLog:
        row = await self._db.insert("activity_logs", log.model_dump(exclude={"id"}))
        return ActivityLog.model_validate(row)

    async def list_activity_logs(self, subsidiary_id: int | None = None) -> list[ActivityLog]:
        if subsidiary_id is None:
            rows = await self._db.fetch_all("SELECT * FROM activity_logs ORDER BY id")
        else:
            rows = await self._db.fetch_all(
                "SELECT * FROM activity_logs WHERE subsidiary_id = ? ORDER BY id",
                (subsidiary_id,),
            )
        return [ActivityLog.model_validate(row) for row in rows]

    async def list_activity_logs_between(
        self,
        start: datetime,
        end: datetime,
        subsidiary_id: int | None = None,
    ) -> list[ActivityLog]:
        sql = "SELECT * FROM activity_logs WHERE timestamp >= ? AND timestamp <= ?"
        params: list[Any] = [start, end]
        if subsidiary_id is not None:
            sql += " AND subsidiary_id = ?"
            params.append(subsidiary_id)
        rows = await self._db.fetch_all(sql + " ORDER BY id", params)
        return [ActivityLog.model_validate(row) for row in rows]
