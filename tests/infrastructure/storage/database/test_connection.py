"""Tests for the connection factory and the SQLite adapter."""

import pytest

from subsidiary_manager.config import DatabaseSettings
from subsidiary_manager.core.exceptions import (
    ConfigurationError,
    ConflictError,
    DatabaseConnectionError,
    DatabaseError,
)
from subsidiary_manager.infrastructure.storage.database import (
    close_database,
    connect_database,
    create_database,
    get_database,
    init_database,
)
from subsidiary_manager.infrastructure.storage.database.sqlite import SQLiteDatabase


class TestConnectionFactory:
    def test_get_database_before_init(self):
        with pytest.raises(DatabaseConnectionError) as exc_info:
            get_database()
        assert exc_info.value.message == "Database connection not established"

    def test_create_database_selects_adapter(self, sqlite_config):
        db = create_database(sqlite_config)
        assert isinstance(db, SQLiteDatabase)
        assert not db.connected

    def test_unknown_engine(self, sqlite_config):
        config = sqlite_config.model_copy(update={"engine": "oracle"})
        with pytest.raises(ConfigurationError):
            create_database(config)

    async def test_init_and_close(self, sqlite_config):
        db = await init_database(sqlite_config)
        assert get_database() is db
        assert await init_database(sqlite_config) is db

        await close_database()
        with pytest.raises(DatabaseConnectionError):
            get_database()

    async def test_connect_database_returns_ready_handle(self, sqlite_config):
        db = await connect_database(sqlite_config)
        try:
            assert db.connected
            await db.ping()
        finally:
            await db.close()


class TestUnconnectedHandle:
    async def test_queries_raise_connection_error(self, sqlite_config):
        db = create_database(sqlite_config)
        with pytest.raises(DatabaseConnectionError):
            await db.fetch_all("SELECT 1")

    async def test_transaction_raises_connection_error(self, sqlite_config):
        db = create_database(sqlite_config)
        with pytest.raises(DatabaseConnectionError):
            async with db.transaction():
                pass

    async def test_close_is_idempotent(self, sqlite_config):
        db = create_database(sqlite_config)
        await db.close()
        await db.connect()
        await db.connect()
        await db.close()
        await db.close()
        assert not db.connected


class TestRowInterface:
    @pytest.fixture
    async def scratch(self, sqlite_config: DatabaseSettings):
        db = await connect_database(sqlite_config)
        await db.execute("CREATE TABLE t (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT UNIQUE)")
        yield db
        await db.close()

    async def test_insert_returns_row_with_id(self, scratch):
        row = await scratch.insert("t", {"name": "a"})
        assert row == {"id": 1, "name": "a"}

    async def test_fetch_shapes(self, scratch):
        await scratch.insert("t", {"name": "a"})
        await scratch.insert("t", {"name": "b"})

        rows = await scratch.fetch_all("SELECT * FROM t ORDER BY id")
        assert [r["name"] for r in rows] == ["a", "b"]
        assert await scratch.fetch_one("SELECT * FROM t WHERE name = ?", ("zzz",)) is None

    async def test_execute_reports_rowcount(self, scratch):
        await scratch.insert("t", {"name": "a"})
        result = await scratch.execute("UPDATE t SET name = ? WHERE id = ?", ("c", 1))
        assert result.rowcount == 1
        result = await scratch.execute("DELETE FROM t WHERE id = ?", (42,))
        assert result.rowcount == 0

    async def test_unique_violation_becomes_conflict(self, scratch):
        await scratch.insert("t", {"name": "a"})
        with pytest.raises(ConflictError) as exc_info:
            await scratch.insert("t", {"name": "a"})
        assert exc_info.value.details["constraint"] == "t.name"

    async def test_bad_sql_becomes_database_error(self, scratch):
        with pytest.raises(DatabaseError):
            await scratch.fetch_all("SELECT * FROM missing_table")

    async def test_transaction_rolls_back_on_error(self, scratch):
        with pytest.raises(RuntimeError):
            async with scratch.transaction() as tx:
                await tx.insert("t", {"name": "a"})
                raise RuntimeError("boom")

        assert await scratch.fetch_all("SELECT * FROM t") == []

    async def test_transaction_commits(self, scratch):
        async with scratch.transaction() as tx:
            await tx.insert("t", {"name": "a"})
            await tx.insert("t", {"name": "b"})

        assert len(await scratch.fetch_all("SELECT * FROM t")) == 2
