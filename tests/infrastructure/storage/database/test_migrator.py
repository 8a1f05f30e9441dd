"""Tests for the schema migrator."""

import pytest

from subsidiary_manager.infrastructure.storage.database.migrations import (
    discover_migrations,
    get_migration_status,
    run_migrations,
)

TABLES = {"subsidiaries", "users", "inventory", "sales", "activity_logs", "sessions"}


class TestDiscovery:
    @pytest.mark.parametrize("engine", ["postgresql", "mysql", "sqlite"])
    def test_every_engine_has_initial_migration(self, engine):
        migrations = discover_migrations(engine)
        assert migrations[0].version == "001"
        assert migrations[0].name == "initial"
        assert len(migrations[0].checksum) == 16

    @pytest.mark.parametrize("engine", ["postgresql", "mysql", "sqlite"])
    def test_statements_strip_comments(self, engine):
        statements = discover_migrations(engine)[0].statements()
        assert statements
        assert all(not s.startswith("--") for s in statements)
        created = " ".join(statements)
        for table in TABLES:
            assert f"CREATE TABLE IF NOT EXISTS {table}" in created


class TestRunMigrations:
    async def test_creates_schema(self, sqlite_config):
        from subsidiary_manager.infrastructure.storage import connect_database

        db = await connect_database(sqlite_config)
        try:
            results = await run_migrations(db)
            assert [r.version for r in results] == ["001"]
            assert all(r.success for r in results)

            rows = await db.fetch_all("SELECT name FROM sqlite_master WHERE type = 'table'")
            assert TABLES <= {r["name"] for r in rows}
        finally:
            await db.close()

    async def test_second_run_is_noop(self, db):
        assert await run_migrations(db) == []

        status = await get_migration_status(db)
        assert status["current_version"] == "001"
        assert status["pending_migrations"] == []

    async def test_records_applied_version(self, db):
        rows = await db.fetch_all("SELECT version, name, checksum FROM schema_migrations")

        assert len(rows) == 1
        assert rows[0]["version"] == "001"
        assert rows[0]["name"] == "initial"
        assert rows[0]["checksum"] == discover_migrations("sqlite")[0].checksum
