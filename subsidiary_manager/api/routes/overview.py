"""Cross-subsidiary views for the head company, plus the activity feed."""

from fastapi import APIRouter, Depends

from subsidiary_manager.api.dependencies import (
    get_activity_log_store,
    get_current_user,
    get_inventory_store,
    get_sales_store,
    get_user_store,
    require_mhc_admin,
)
from subsidiary_manager.application.dto.responses import (
    ActivityLogResponse,
    SaleResponse,
    StockTotalsResponse,
    UserResponse,
)
from subsidiary_manager.core.entities import User
from subsidiary_manager.core.interfaces import (
    IActivityLogStore,
    IInventoryStore,
    ISalesStore,
    IUserStore,
)

router = APIRouter(prefix="/api", tags=["overview"])


@router.get("/users", response_model=list[UserResponse])
async def list_all_users(
    _: User = Depends(require_mhc_admin),
    store: IUserStore = Depends(get_user_store),
) -> list[UserResponse]:
    """Every user across all subsidiaries."""
    return [UserResponse.from_entity(u) for u in await store.list_users()]


@router.get("/sales", response_model=list[SaleResponse])
async def list_all_sales(
    _: User = Depends(require_mhc_admin),
    store: ISalesStore = Depends(get_sales_store),
) -> list[SaleResponse]:
    """Every sale across all subsidiaries."""
    return [SaleResponse.from_entity(s) for s in await store.list_sales()]


@router.get("/inventory/total", response_model=StockTotalsResponse)
async def total_inventory(
    _: User = Depends(require_mhc_admin),
    store: IInventoryStore = Depends(get_inventory_store),
) -> StockTotalsResponse:
    """Item count, units and value at cost across all subsidiaries."""
    return StockTotalsResponse.from_entity(await store.total_stock())


@router.get("/activity-logs", response_model=list[ActivityLogResponse])
async def list_activity_logs(
    user: User = Depends(get_current_user),
    store: IActivityLogStore = Depends(get_activity_log_store),
) -> list[ActivityLogResponse]:
    """MHC admins see every entry; everyone else their subsidiary's."""
    subsidiary_id = None if user.is_mhc_admin else user.subsidiary_id
    logs = await store.list_activity_logs(subsidiary_id)
    return [ActivityLogResponse.from_entity(log) for log in logs]
