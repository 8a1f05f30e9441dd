"""
Connection factory.

Selects the engine adapter for the resolved DbConfig and holds the one
process-wide handle. `connect_database` returns a ready handle that callers
pass to stores; `get_database` is for code that cannot be handed one
(FastAPI dependencies) and fails with a typed error until startup finishes.
"""

from subsidiary_manager.config import DatabaseSettings, get_logger, get_settings
from subsidiary_manager.core.exceptions import ConfigurationError, DatabaseConnectionError
from subsidiary_manager.infrastructure.storage.database.base import Database

logger = get_logger(__name__)


def _adapter_class(engine: str) -> type[Database]:
    # Drivers import lazily so a deployment only needs its own engine's driver
    if engine == "postgresql":
        from subsidiary_manager.infrastructure.storage.database.postgres import PostgresDatabase

        return PostgresDatabase
    if engine == "mysql":
        from subsidiary_manager.infrastructure.storage.database.mysql import MySQLDatabase

        return MySQLDatabase
    if engine == "sqlite":
        from subsidiary_manager.infrastructure.storage.database.sqlite import SQLiteDatabase

        return SQLiteDatabase
    raise ConfigurationError(
        f"Unsupported database engine: {engine}",
        code="CONFIGURATION_ERROR",
        details={"engine": engine},
    )


def create_database(config: DatabaseSettings) -> Database:
    """Build an unconnected handle for the configured engine."""
    return _adapter_class(config.engine)(config)


async def connect_database(config: DatabaseSettings) -> Database:
    """Build and connect a handle; raises DatabaseConnectionError on failure."""
    logger.info("database_initializing", engine=config.engine)
    db = create_database(config)
    await db.connect()
    return db


# Global database handle
_database: Database | None = None


async def init_database(config: DatabaseSettings | None = None) -> Database:
    """Connect the process-wide handle once and return it."""
    global _database
    if _database is None:
        _database = await connect_database(config or get_settings().database)
    return _database


def get_database() -> Database:
    """Return the process-wide handle or fail if startup has not finished."""
    if _database is None or not _database.connected:
        raise DatabaseConnectionError()
    return _database


def set_database(db: Database | None) -> None:
    """Install a handle directly (tests, embedding applications)."""
    global _database
    _database = db


async def close_database() -> None:
    """Close the process-wide handle."""
    global _database
    if _database is not None:
        await _database.close()
        _database = None
