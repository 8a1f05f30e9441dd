"""User management endpoints scoped to one subsidiary."""

from fastapi import APIRouter, Depends, Response, status

from subsidiary_manager.api.dependencies import (
    get_current_user,
    get_manage_users_use_case,
    get_user_store,
    require_subsidiary_admin,
)
from subsidiary_manager.application.dto.requests import CreateUserRequest, UpdateUserRequest
from subsidiary_manager.application.dto.responses import ErrorResponse, UserResponse
from subsidiary_manager.application.use_cases import ManageUsersUseCase
from subsidiary_manager.core.entities import Subsidiary, User
from subsidiary_manager.core.interfaces import IUserStore

router = APIRouter(prefix="/api/subsidiaries/{subsidiary_id}/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_subsidiary_users(
    subsidiary: Subsidiary = Depends(require_subsidiary_admin),
    store: IUserStore = Depends(get_user_store),
) -> list[UserResponse]:
    """List the subsidiary's users."""
    users = await store.list_users_by_subsidiary(subsidiary.id)  # type: ignore[arg-type]
    return [UserResponse.from_entity(u) for u in users]


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_subsidiary_user(
    body: CreateUserRequest,
    subsidiary: Subsidiary = Depends(require_subsidiary_admin),
    actor: User = Depends(get_current_user),
    use_case: ManageUsersUseCase = Depends(get_manage_users_use_case),
) -> UserResponse:
    """Create a staff user (or, for MHC admins, a subsidiary admin)."""
    user = await use_case.create(actor, subsidiary.id, body)  # type: ignore[arg-type]
    return UserResponse.from_entity(user)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_subsidiary_user(
    user_id: int,
    body: UpdateUserRequest,
    subsidiary: Subsidiary = Depends(require_subsidiary_admin),
    actor: User = Depends(get_current_user),
    use_case: ManageUsersUseCase = Depends(get_manage_users_use_case),
) -> UserResponse:
    """Rename, re-role or reset the password of a user."""
    user = await use_case.update(actor, subsidiary.id, user_id, body)  # type: ignore[arg-type]
    return UserResponse.from_entity(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_subsidiary_user(
    user_id: int,
    subsidiary: Subsidiary = Depends(require_subsidiary_admin),
    actor: User = Depends(get_current_user),
    use_case: ManageUsersUseCase = Depends(get_manage_users_use_case),
) -> Response:
    """Hard-delete a user."""
    await use_case.delete(actor, subsidiary.id, user_id)  # type: ignore[arg-type]
    return Response(status_code=status.HTTP_204_NO_CONTENT)
