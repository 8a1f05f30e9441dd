"""
PostgreSQL engine adapter built on asyncpg.

asyncpg returns Record objects from queries but only a command status
string (e.g. "UPDATE 1") from statements; both are normalized here.
"""

import itertools
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import asyncpg

from subsidiary_manager.config import DatabaseSettings
from subsidiary_manager.infrastructure.storage.database.base import (
    Database,
    ExecResult,
    Executor,
    Row,
)

_PLACEHOLDER = re.compile(r"\?")


def parse_command_status(status: str) -> int:
    """Affected row count from a command tag: 'INSERT 0 3' -> 3, 'CREATE TABLE' -> 0."""
    last = status.rsplit(" ", 1)[-1] if status else ""
    return int(last) if last.isdigit() else 0


class PostgresExecutor(Executor):
    """Executor over an asyncpg connection."""

    engine = "postgresql"

    async def _raw_fetch_all(self, sql: str, params: list[Any]) -> list[Row]:
        records = await self._conn.fetch(sql, *params)
        return [dict(record) for record in records]

    async def _raw_fetch_one(self, sql: str, params: list[Any]) -> Row | None:
        record = await self._conn.fetchrow(sql, *params)
        return dict(record) if record is not None else None

    async def _raw_execute(self, sql: str, params: list[Any]) -> ExecResult:
        status = await self._conn.execute(sql, *params)
        return ExecResult(rowcount=parse_command_status(status))

    async def _raw_insert(self, table: str, sql: str, params: list[Any]) -> Row:
        record = await self._conn.fetchrow(f"{sql} RETURNING *", *params)
        return dict(record)


class PostgresDatabase(Database):
    """asyncpg connection pool."""

    engine = "postgresql"
    executor_class = PostgresExecutor
    driver_errors = (asyncpg.PostgresError, asyncpg.InterfaceError)

    def __init__(self, config: DatabaseSettings):
        super().__init__(config)
        self._pool: asyncpg.Pool | None = None

    def prepare(self, sql: str) -> str:
        counter = itertools.count(1)
        return _PLACEHOLDER.sub(lambda _: f"${next(counter)}", sql)

    def unique_violation(self, error: BaseException) -> str | None:
        if isinstance(error, asyncpg.UniqueViolationError):
            return getattr(error, "constraint_name", None) or "unique"
        return None

    async def _open(self) -> None:
        options: dict[str, Any] = {
            "min_size": self.config.pool_min_size,
            "max_size": self.config.pool_max_size,
            "command_timeout": self.config.query_timeout,
            "timeout": self.config.connect_timeout,
        }
        if self.config.url:
            self._pool = await asyncpg.create_pool(dsn=self.config.url, **options)
        else:
            self._pool = await asyncpg.create_pool(
                host=self.config.host,
                port=self.config.port,
                database=self.config.database,
                user=self.config.username,
                password=self.config.password,
                **options,
            )

    async def _close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    @asynccontextmanager
    async def _acquire(self) -> AsyncIterator[asyncpg.Connection]:
        async with self._pool.acquire() as conn:
            yield conn

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[asyncpg.Connection]:
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                yield conn
