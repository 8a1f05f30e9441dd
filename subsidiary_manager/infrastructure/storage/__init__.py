"""Storage infrastructure implementations."""

from subsidiary_manager.infrastructure.storage.database import (
    Database,
    close_database,
    connect_database,
    create_database,
    get_database,
    init_database,
)
from subsidiary_manager.infrastructure.storage.memory import MemorySessionStore
from subsidiary_manager.infrastructure.storage.sql import (
    SQLActivityLogStore,
    SQLInventoryStore,
    SQLSalesStore,
    SQLSessionStore,
    SQLSubsidiaryStore,
    SQLUserStore,
)

__all__ = [
    # Connection
    "Database",
    "create_database",
    "connect_database",
    "init_database",
    "get_database",
    "close_database",
    # SQL stores
    "SQLActivityLogStore",
    "SQLInventoryStore",
    "SQLSalesStore",
    "SQLSessionStore",
    "SQLSubsidiaryStore",
    "SQLUserStore",
    # In-process stores
    "MemorySessionStore",
]
