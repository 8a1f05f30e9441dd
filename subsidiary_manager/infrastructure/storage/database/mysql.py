"""
MySQL engine adapter built on aiomysql.

aiomysql reports mutations through cursor metadata (rowcount, lastrowid)
rather than rows, and has no RETURNING clause; inserts re-read the new row
on the same connection.
"""

import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aiomysql
import pymysql
from pymysql.constants import CLIENT, ER

from subsidiary_manager.config import DatabaseSettings
from subsidiary_manager.infrastructure.storage.database.base import (
    Database,
    ExecResult,
    Executor,
    Row,
)

_DUPLICATE_KEY = re.compile(r"for key '([^']+)'")


class MySQLExecutor(Executor):
    """Executor over an aiomysql connection."""

    engine = "mysql"

    async def _raw_fetch_all(self, sql: str, params: list[Any]) -> list[Row]:
        async with self._conn.cursor(aiomysql.DictCursor) as cur:
            await cur.execute(sql, tuple(params))
            return list(await cur.fetchall())

    async def _raw_fetch_one(self, sql: str, params: list[Any]) -> Row | None:
        async with self._conn.cursor(aiomysql.DictCursor) as cur:
            await cur.execute(sql, tuple(params))
            return await cur.fetchone()

    async def _raw_execute(self, sql: str, params: list[Any]) -> ExecResult:
        async with self._conn.cursor() as cur:
            await cur.execute(sql, tuple(params))
            return ExecResult(rowcount=cur.rowcount, last_insert_id=cur.lastrowid or None)

    async def _raw_insert(self, table: str, sql: str, params: list[Any]) -> Row:
        async with self._conn.cursor(aiomysql.DictCursor) as cur:
            await cur.execute(sql, tuple(params))
            await cur.execute(f"SELECT * FROM {table} WHERE id = %s", (cur.lastrowid,))
            return await cur.fetchone()


class MySQLDatabase(Database):
    """aiomysql connection pool."""

    engine = "mysql"
    executor_class = MySQLExecutor
    driver_errors = (pymysql.err.MySQLError,)

    def __init__(self, config: DatabaseSettings):
        super().__init__(config)
        self._pool: aiomysql.Pool | None = None

    def prepare(self, sql: str) -> str:
        return sql.replace("%", "%%").replace("?", "%s")

    def unique_violation(self, error: BaseException) -> str | None:
        if isinstance(error, pymysql.err.IntegrityError) and error.args:
            if error.args[0] == ER.DUP_ENTRY:
                match = _DUPLICATE_KEY.search(str(error.args[-1]))
                return match.group(1) if match else "unique"
        return None

    async def _open(self) -> None:
        self._pool = await aiomysql.create_pool(
            host=self.config.host,
            port=self.config.port,
            user=self.config.username,
            password=self.config.password,
            db=self.config.database,
            minsize=self.config.pool_min_size,
            maxsize=self.config.pool_max_size,
            connect_timeout=self.config.connect_timeout,
            autocommit=True,
            charset="utf8mb4",
            # rowcount reports matched rows, as the other engines do
            client_flag=CLIENT.FOUND_ROWS,
        )

    async def _close(self) -> None:
        if self._pool is not None:
            self._pool.close()
            await self._pool.wait_closed()
            self._pool = None

    @asynccontextmanager
    async def _acquire(self) -> AsyncIterator[aiomysql.Connection]:
        async with self._pool.acquire() as conn:
            yield conn

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[aiomysql.Connection]:
        async with self._pool.acquire() as conn:
            await conn.begin()
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            else:
                await conn.commit()
