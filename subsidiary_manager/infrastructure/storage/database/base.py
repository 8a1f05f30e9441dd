"""
Engine-agnostic database access.

Every engine adapter exposes the same row-level interface so stores never
branch on engine identity:

    async with db.transaction() as tx:
        row = await tx.fetch_one("SELECT * FROM inventory WHERE id = ?", (item_id,))
        result = await tx.execute("UPDATE inventory SET quantity = ? WHERE id = ?", (q, item_id))

SQL is written once with `?` placeholders; adapters rewrite them for their
driver. Rows are plain dicts. Driver errors are translated into domain
storage errors here, once, instead of at every call site.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from subsidiary_manager.config import DatabaseSettings, get_logger
from subsidiary_manager.core.exceptions import (
    ConflictError,
    DatabaseConnectionError,
    DatabaseError,
    QueryTimeoutError,
    SubsidiaryManagerError,
)

logger = get_logger(__name__)

Row = dict[str, Any]
Params = Sequence[Any]


@dataclass
class ExecResult:
    """Outcome of a statement that returns no rows."""

    rowcount: int
    last_insert_id: int | None = None


class Executor(ABC):
    """
    Runs statements on one connection.

    Subclasses implement the `_raw_*` hooks against their driver; the public
    methods add placeholder rewriting, the query timeout and error
    translation.
    """

    engine: str = ""

    def __init__(self, database: "Database", conn: Any):
        self._database = database
        self._conn = conn

    @property
    def timeout(self) -> float:
        return self._database.config.query_timeout

    async def fetch_all(self, sql: str, params: Params = ()) -> list[Row]:
        """Run a query and return every row."""
        db = self._database
        return await self._run(
            "fetch_all", sql, self._raw_fetch_all(db.prepare(sql), db.adapt_params(params))
        )

    async def fetch_one(self, sql: str, params: Params = ()) -> Row | None:
        """Run a query and return the first row, or None."""
        db = self._database
        return await self._run(
            "fetch_one", sql, self._raw_fetch_one(db.prepare(sql), db.adapt_params(params))
        )

    async def execute(self, sql: str, params: Params = ()) -> ExecResult:
        """Run a statement and report affected rows."""
        db = self._database
        return await self._run(
            "execute", sql, self._raw_execute(db.prepare(sql), db.adapt_params(params))
        )

    async def insert(self, table: str, values: dict[str, Any]) -> Row:
        """Insert one row into a table keyed by a generated `id` and return it as stored."""
        columns = list(values)
        sql = "INSERT INTO {table} ({columns}) VALUES ({placeholders})".format(
            table=table,
            columns=", ".join(columns),
            placeholders=", ".join("?" for _ in columns),
        )
        params = self._database.adapt_params([values[c] for c in columns])
        return await self._run(
            "insert", sql, self._raw_insert(table, self._database.prepare(sql), params)
        )

    async def _run(self, operation: str, sql: str, awaitable: Any) -> Any:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except SubsidiaryManagerError:
            raise
        except TimeoutError:
            logger.error(
                "query_timeout",
                engine=self.engine,
                operation=operation,
                timeout=self.timeout,
                sql=_compact(sql),
            )
            raise QueryTimeoutError(self.timeout, operation) from None
        except self._database.driver_errors as e:
            raise self._database.translate_error(e, operation, sql) from e

    @abstractmethod
    async def _raw_fetch_all(self, sql: str, params: list[Any]) -> list[Row]: ...

    @abstractmethod
    async def _raw_fetch_one(self, sql: str, params: list[Any]) -> Row | None: ...

    @abstractmethod
    async def _raw_execute(self, sql: str, params: list[Any]) -> ExecResult: ...

    @abstractmethod
    async def _raw_insert(self, table: str, sql: str, params: list[Any]) -> Row: ...


class Database(ABC):
    """
    A connected pool for one engine.

    Construct with the resolved DbConfig, then `await connect()`. Any use
    before `connect()` completes raises DatabaseConnectionError.
    """

    engine: str = ""
    executor_class: type[Executor]
    driver_errors: tuple[type[BaseException], ...] = ()

    def __init__(self, config: DatabaseSettings):
        self.config = config
        self._connected = False
        self._lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        """Open the pool. Idempotent."""
        async with self._lock:
            if self._connected:
                return
            try:
                await asyncio.wait_for(self._open(), timeout=self.config.connect_timeout)
            except TimeoutError:
                raise DatabaseConnectionError(
                    f"Timed out connecting to {self.engine} after "
                    f"{self.config.connect_timeout} seconds"
                ) from None
            except (*self.driver_errors, OSError) as e:
                raise DatabaseConnectionError(
                    f"Could not connect to {self.engine}: {e}"
                ) from e
            self._connected = True
            logger.info("database_connected", **self.config.describe())

    async def close(self) -> None:
        """Close the pool. Idempotent."""
        async with self._lock:
            if not self._connected:
                return
            await self._close()
            self._connected = False
            logger.info("database_closed", engine=self.engine)

    def _ensure_connected(self) -> None:
        if not self._connected:
            raise DatabaseConnectionError()

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[Executor]:
        """
        Borrow a connection in autocommit mode.

        Usage:
            async with db.acquire() as conn:
                rows = await conn.fetch_all("SELECT * FROM sales")
        """
        self._ensure_connected()
        try:
            async with self._acquire() as conn:
                yield self.executor_class(self, conn)
        except self.driver_errors as e:
            raise self.translate_error(e, "acquire", "") from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Executor]:
        """
        Borrow a connection inside a transaction.

        Commits on success, rolls back on any exception and re-raises it.
        """
        self._ensure_connected()
        try:
            async with self._transaction() as conn:
                yield self.executor_class(self, conn)
        except self.driver_errors as e:
            raise self.translate_error(e, "transaction", "") from e

    # Convenience wrappers for single statements

    async def fetch_all(self, sql: str, params: Params = ()) -> list[Row]:
        async with self.acquire() as conn:
            return await conn.fetch_all(sql, params)

    async def fetch_one(self, sql: str, params: Params = ()) -> Row | None:
        async with self.acquire() as conn:
            return await conn.fetch_one(sql, params)

    async def execute(self, sql: str, params: Params = ()) -> ExecResult:
        async with self.acquire() as conn:
            return await conn.execute(sql, params)

    async def insert(self, table: str, values: dict[str, Any]) -> Row:
        async with self.acquire() as conn:
            return await conn.insert(table, values)

    async def ping(self) -> None:
        """Round-trip a trivial query."""
        await self.fetch_one("SELECT 1 AS ok")

    # Engine hooks

    def prepare(self, sql: str) -> str:
        """Rewrite `?` placeholders into the driver's style."""
        return sql

    def adapt_params(self, params: Params) -> list[Any]:
        """Convert Python values the driver cannot bind natively."""
        return list(params)

    def unique_violation(self, error: BaseException) -> str | None:
        """Name of the unique constraint the error violated, if it is one."""
        return None

    def translate_error(
        self, error: BaseException, operation: str, sql: str
    ) -> SubsidiaryManagerError:
        """Map a driver exception onto the storage error taxonomy."""
        constraint = self.unique_violation(error)
        if constraint is not None:
            logger.warning(
                "unique_violation",
                engine=self.engine,
                operation=operation,
                constraint=constraint,
            )
            return ConflictError(
                "Unique constraint violated",
                details={"constraint": constraint},
            )

        logger.error(
            "database_error",
            engine=self.engine,
            operation=operation,
            error_type=type(error).__name__,
            error=str(error),
            sql=_compact(sql),
        )
        return DatabaseError(operation, str(error))

    @abstractmethod
    async def _open(self) -> None: ...

    @abstractmethod
    async def _close(self) -> None: ...

    @abstractmethod
    def _acquire(self) -> Any:
        """Async context manager yielding a raw autocommit connection."""

    @abstractmethod
    def _transaction(self) -> Any:
        """Async context manager yielding a raw connection inside a transaction."""


def _compact(sql: str) -> str:
    return " ".join(sql.split())[:200]
