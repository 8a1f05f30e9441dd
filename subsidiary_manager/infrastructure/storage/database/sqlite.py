"""
SQLite engine adapter built on aiosqlite.

Used for local development and the test-suite. Connections run in
autocommit mode; transactions are explicit `BEGIN IMMEDIATE` blocks so a
writer holds the database lock from its first statement.
"""

import asyncio
import sqlite3
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import aiosqlite

from subsidiary_manager.config import DatabaseSettings, get_logger
from subsidiary_manager.infrastructure.storage.database.base import (
    Database,
    ExecResult,
    Executor,
    Row,
)

logger = get_logger(__name__)


class SQLiteExecutor(Executor):
    """Executor over an aiosqlite connection."""

    engine = "sqlite"

    async def _raw_fetch_all(self, sql: str, params: list[Any]) -> list[Row]:
        cursor = await self._conn.execute(sql, params)
        rows = await cursor.fetchall()
        await cursor.close()
        return [dict(row) for row in rows]

    async def _raw_fetch_one(self, sql: str, params: list[Any]) -> Row | None:
        cursor = await self._conn.execute(sql, params)
        row = await cursor.fetchone()
        await cursor.close()
        return dict(row) if row is not None else None

    async def _raw_execute(self, sql: str, params: list[Any]) -> ExecResult:
        cursor = await self._conn.execute(sql, params)
        result = ExecResult(rowcount=cursor.rowcount, last_insert_id=cursor.lastrowid)
        await cursor.close()
        return result

    async def _raw_insert(self, table: str, sql: str, params: list[Any]) -> Row:
        cursor = await self._conn.execute(sql, params)
        row_id = cursor.lastrowid
        await cursor.close()
        cursor = await self._conn.execute(f"SELECT * FROM {table} WHERE id = ?", (row_id,))
        row = await cursor.fetchone()
        await cursor.close()
        return dict(row)


class SQLiteDatabase(Database):
    """
    Async SQLite connection pool.

    Manages a fixed pool of connections to one database file.
    """

    engine = "sqlite"
    executor_class = SQLiteExecutor
    driver_errors = (sqlite3.Error,)

    def __init__(self, config: DatabaseSettings):
        super().__init__(config)
        self.db_path = config.sqlite_path
        self.pool_size = max(1, config.pool_max_size)
        self.busy_timeout = int(config.query_timeout * 1000)

        self._pool: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=self.pool_size)
        self._connections: list[aiosqlite.Connection] = []

    def adapt_params(self, params: Sequence[Any]) -> list[Any]:
        adapted: list[Any] = []
        for value in params:
            if isinstance(value, Decimal):
                value = str(value)
            elif isinstance(value, datetime | date):
                value = value.isoformat()
            adapted.append(value)
        return adapted

    def unique_violation(self, error: BaseException) -> str | None:
        message = str(error)
        if isinstance(error, sqlite3.IntegrityError) and "UNIQUE constraint failed" in message:
            return message.split(":", 1)[-1].strip()
        return None

    async def _open(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        for _ in range(self.pool_size):
            conn = await self._create_connection()
            self._connections.append(conn)
            await self._pool.put(conn)
        logger.info(
            "connection_pool_initialized",
            db_path=str(self.db_path),
            pool_size=self.pool_size,
        )

    async def _create_connection(self) -> aiosqlite.Connection:
        """Create a new database connection with optimized settings."""
        conn = await aiosqlite.connect(self.db_path, isolation_level=None)

        # WAL lets readers proceed while a sale transaction writes
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        await conn.execute("PRAGMA foreign_keys=ON")

        conn.row_factory = aiosqlite.Row
        return conn

    async def _close(self) -> None:
        for conn in self._connections:
            await conn.close()
        self._connections.clear()
        self._pool = asyncio.Queue(maxsize=self.pool_size)

    @asynccontextmanager
    async def _acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        conn = await self._pool.get()
        try:
            yield conn
        finally:
            await self._pool.put(conn)

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        async with self._acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                await conn.execute("ROLLBACK")
                raise
            else:
                await conn.execute("COMMIT")
