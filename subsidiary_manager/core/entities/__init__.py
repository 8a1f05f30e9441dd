"""Domain entities."""

from subsidiary_manager.core.entities.activity_log import ActivityLog
from subsidiary_manager.core.entities.base import to_cents, utcnow
from subsidiary_manager.core.entities.inventory import InventoryItem, StockTotals
from subsidiary_manager.core.entities.sale import Sale
from subsidiary_manager.core.entities.session import AuthSession
from subsidiary_manager.core.entities.subsidiary import Subsidiary
from subsidiary_manager.core.entities.user import User, UserRole

__all__ = [
    "ActivityLog",
    "AuthSession",
    "InventoryItem",
    "Sale",
    "StockTotals",
    "Subsidiary",
    "User",
    "UserRole",
    "to_cents",
    "utcnow",
]
