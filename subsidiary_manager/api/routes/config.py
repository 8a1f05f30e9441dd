"""Database engine configuration endpoints (MHC admin only)."""

from fastapi import APIRouter, Depends

from subsidiary_manager.api.dependencies import get_database_config_use_case, require_mhc_admin
from subsidiary_manager.application.dto.requests import UpdateDatabaseConfigRequest
from subsidiary_manager.application.dto.responses import DatabaseConfigResponse
from subsidiary_manager.application.use_cases import DatabaseConfigResult, DatabaseConfigUseCase
from subsidiary_manager.core.entities import User

router = APIRouter(prefix="/api/config", tags=["config"])


def _to_response(result: DatabaseConfigResult) -> DatabaseConfigResponse:
    return DatabaseConfigResponse(
        engine=result.engine,
        connection=result.connection,
        pending_engine=result.pending_engine,
        restart_required=result.restart_required,
    )


@router.get("/database", response_model=DatabaseConfigResponse)
async def get_database_config(
    _: User = Depends(require_mhc_admin),
    use_case: DatabaseConfigUseCase = Depends(get_database_config_use_case),
) -> DatabaseConfigResponse:
    """Active engine and non-secret connection details."""
    return _to_response(use_case.current())


@router.post("/database", response_model=DatabaseConfigResponse)
async def update_database_config(
    body: UpdateDatabaseConfigRequest,
    _: User = Depends(require_mhc_admin),
    use_case: DatabaseConfigUseCase = Depends(get_database_config_use_case),
) -> DatabaseConfigResponse:
    """Save a new engine; it takes effect after a restart."""
    return _to_response(use_case.select_engine(body.engine))
