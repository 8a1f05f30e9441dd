"""Core interfaces (ports) for dependency injection."""

from subsidiary_manager.core.interfaces.inventory_store import IInventoryStore
from subsidiary_manager.core.interfaces.sales_store import ISalesStore
from subsidiary_manager.core.interfaces.storage import (
    IActivityLogStore,
    ISessionStore,
    ISubsidiaryStore,
    IUserStore,
)

__all__ = [
    "IActivityLogStore",
    "IInventoryStore",
    "ISalesStore",
    "ISessionStore",
    "ISubsidiaryStore",
    "IUserStore",
]
