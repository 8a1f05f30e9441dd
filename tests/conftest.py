"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Iterator
from pathlib import Path

import pytest

from subsidiary_manager.config import DatabaseSettings, reset_settings
from subsidiary_manager.core.entities import User, UserRole
from subsidiary_manager.infrastructure.storage import Database, connect_database
from subsidiary_manager.infrastructure.storage.database import set_database
from subsidiary_manager.infrastructure.storage.database.migrations import run_migrations


@pytest.fixture(autouse=True)
def clean_globals(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from the developer's environment and each other."""
    for var in ("DB_ENGINE", "DATABASE_URL", "AUTH_ADMIN_PASSWORD", "AUTH_SESSION_BACKEND"):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()
    set_database(None)


@pytest.fixture
def sqlite_config(tmp_path: Path) -> DatabaseSettings:
    """SQLite settings pointing at a fresh temporary file."""
    return DatabaseSettings(
        engine="sqlite",
        sqlite_path=tmp_path / "test.db",
        pool_max_size=2,
        query_timeout=5.0,
    )


@pytest.fixture
async def db(sqlite_config: DatabaseSettings) -> AsyncGenerator[Database, None]:
    """Connected, migrated SQLite database."""
    database = await connect_database(sqlite_config)
    await run_migrations(database)
    yield database
    await database.close()


@pytest.fixture
def mhc_admin() -> User:
    return User(id=1, username="admin", password="x", role=UserRole.MHC_ADMIN)


@pytest.fixture
def subsidiary_admin() -> User:
    return User(
        id=2,
        username="acme-admin",
        password="x",
        role=UserRole.SUBSIDIARY_ADMIN,
        subsidiary_id=10,
    )


@pytest.fixture
def staff_user() -> User:
    return User(id=3, username="clerk", password="x", role=UserRole.STAFF, subsidiary_id=10)
