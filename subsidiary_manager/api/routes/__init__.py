"""API route modules."""

from subsidiary_manager.api.routes.auth import router as auth_router
from subsidiary_manager.api.routes.config import router as config_router
from subsidiary_manager.api.routes.health import router as health_router
from subsidiary_manager.api.routes.inventory import router as inventory_router
from subsidiary_manager.api.routes.overview import router as overview_router
from subsidiary_manager.api.routes.reports import router as reports_router
from subsidiary_manager.api.routes.sales import router as sales_router
from subsidiary_manager.api.routes.subsidiaries import router as subsidiaries_router
from subsidiary_manager.api.routes.users import router as users_router

__all__ = [
    "auth_router",
    "config_router",
    "health_router",
    "inventory_router",
    "overview_router",
    "reports_router",
    "sales_router",
    "subsidiaries_router",
    "users_router",
]
