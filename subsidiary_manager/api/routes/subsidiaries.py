"""Subsidiary administration endpoints (MHC admin only)."""

from fastapi import APIRouter, Depends, status

from subsidiary_manager.api.dependencies import (
    get_activity_log_store,
    get_subsidiary_store,
    require_mhc_admin,
    require_subsidiary_access,
)
from subsidiary_manager.application.dto.requests import (
    CreateSubsidiaryRequest,
    UpdateSubsidiaryRequest,
)
from subsidiary_manager.application.dto.responses import ErrorResponse, SubsidiaryResponse
from subsidiary_manager.application.use_cases import log_activity
from subsidiary_manager.core.entities import Subsidiary, User
from subsidiary_manager.core.interfaces import IActivityLogStore, ISubsidiaryStore

router = APIRouter(prefix="/api/subsidiaries", tags=["subsidiaries"])


@router.get("", response_model=list[SubsidiaryResponse])
async def list_subsidiaries(
    _: User = Depends(require_mhc_admin),
    store: ISubsidiaryStore = Depends(get_subsidiary_store),
) -> list[SubsidiaryResponse]:
    """List every subsidiary."""
    return [SubsidiaryResponse.from_entity(s) for s in await store.list_subsidiaries()]


@router.post(
    "",
    response_model=SubsidiaryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_subsidiary(
    body: CreateSubsidiaryRequest,
    user: User = Depends(require_mhc_admin),
    store: ISubsidiaryStore = Depends(get_subsidiary_store),
    activity: IActivityLogStore = Depends(get_activity_log_store),
) -> SubsidiaryResponse:
    """Register a subsidiary. Tax IDs are unique."""
    subsidiary = await store.create_subsidiary(Subsidiary(**body.model_dump()))
    await log_activity(
        activity,
        "subsidiary_created",
        f"Created subsidiary {subsidiary.name}",
        user=user,
        subsidiary_id=subsidiary.id,
    )
    return SubsidiaryResponse.from_entity(subsidiary)


@router.get(
    "/{subsidiary_id}",
    response_model=SubsidiaryResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_subsidiary(
    subsidiary: Subsidiary = Depends(require_subsidiary_access),
) -> SubsidiaryResponse:
    """One subsidiary; its own users may read it too."""
    return SubsidiaryResponse.from_entity(subsidiary)


@router.patch(
    "/{subsidiary_id}",
    response_model=SubsidiaryResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_subsidiary(
    subsidiary_id: int,
    body: UpdateSubsidiaryRequest,
    user: User = Depends(require_mhc_admin),
    store: ISubsidiaryStore = Depends(get_subsidiary_store),
    activity: IActivityLogStore = Depends(get_activity_log_store),
) -> SubsidiaryResponse:
    """Partial update; send status=false to deactivate."""
    changes = body.model_dump(exclude_unset=True)
    subsidiary = await store.update_subsidiary(subsidiary_id, changes)
    await log_activity(
        activity,
        "subsidiary_updated",
        f"Updated {subsidiary.name}: {', '.join(sorted(changes)) or 'no changes'}",
        user=user,
        subsidiary_id=subsidiary_id,
    )
    return SubsidiaryResponse.from_entity(subsidiary)
