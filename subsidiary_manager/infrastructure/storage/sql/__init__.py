"""Engine-agnostic SQL store implementations."""

from subsidiary_manager.infrastructure.storage.sql.activity_log_store import SQLActivityLogStore
from subsidiary_manager.infrastructure.storage.sql.inventory_store import SQLInventoryStore
from subsidiary_manager.infrastructure.storage.sql.sales_store import SQLSalesStore
from subsidiary_manager.infrastructure.storage.sql.session_store import SQLSessionStore
from subsidiary_manager.infrastructure.storage.sql.subsidiary_store import SQLSubsidiaryStore
from subsidiary_manager.infrastructure.storage.sql.user_store import SQLUserStore

__all__ = [
    "SQLActivityLogStore",
    "SQLInventoryStore",
    "SQLSalesStore",
    "SQLSessionStore",
    "SQLSubsidiaryStore",
    "SQLUserStore",
]
