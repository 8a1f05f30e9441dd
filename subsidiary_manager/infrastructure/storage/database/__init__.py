"""Engine-agnostic database access for PostgreSQL, MySQL and SQLite."""

from subsidiary_manager.infrastructure.storage.database.base import (
    Database,
    ExecResult,
    Executor,
    Row,
)
from subsidiary_manager.infrastructure.storage.database.connection import (
    close_database,
    connect_database,
    create_database,
    get_database,
    init_database,
    set_database,
)

__all__ = [
    "Database",
    "ExecResult",
    "Executor",
    "Row",
    "close_database",
    "connect_database",
    "create_database",
    "get_database",
    "init_database",
    "set_database",
]
