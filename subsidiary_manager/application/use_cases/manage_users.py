"""User management use cases for subsidiary staff accounts."""

from subsidiary_manager.application.dto.requests import CreateUserRequest, UpdateUserRequest
from subsidiary_manager.application.security import hash_password
from subsidiary_manager.application.use_cases.activity import log_activity
from subsidiary_manager.config import get_logger
from subsidiary_manager.core.entities import User, UserRole
from subsidiary_manager.core.exceptions import (
    PermissionDeniedError,
    UserNotFoundError,
    ValidationError,
)
from subsidiary_manager.core.interfaces import IActivityLogStore, IUserStore

logger = get_logger(__name__)


def check_assignable_role(actor: User, role: UserRole) -> None:
    """
    MHC admins may create staff and subsidiary admins; subsidiary admins
    only staff. Nobody creates MHC admins through the API.
    """
    if role == UserRole.MHC_ADMIN:
        raise PermissionDeniedError("Cannot assign the mhc_admin role")
    if role == UserRole.SUBSIDIARY_ADMIN and not actor.is_mhc_admin:
        raise PermissionDeniedError("Only MHC admins can create subsidiary admins")


class ManageUsersUseCase:
    """Create, update and delete users scoped to one subsidiary."""

    def __init__(self, user_store: IUserStore, activity_log_store: IActivityLogStore):
        self._user_store = user_store
        self._activity_log_store = activity_log_store

    async def _get_member(self, subsidiary_id: int, user_id: int) -> User:
        user = await self._user_store.get_user(user_id)
        if user is None or user.subsidiary_id != subsidiary_id:
            raise UserNotFoundError(user_id)
        return user

    async def create(self, actor: User, subsidiary_id: int, request: CreateUserRequest) -> User:
        check_assignable_role(actor, request.role)
        user = await self._user_store.create_user(
            User(
                username=request.username,
                password=hash_password(request.password) if request.password else "",
                role=request.role,
                subsidiary_id=subsidiary_id,
            )
        )
        await log_activity(
            self._activity_log_store,
            "user_created",
            f"Created {user.role.value} {user.username}",
            user=actor,
            subsidiary_id=subsidiary_id,
        )
        return user

    async def update(
        self, actor: User, subsidiary_id: int, user_id: int, request: UpdateUserRequest
    ) -> User:
        target = await self._get_member(subsidiary_id, user_id)
        changes = request.model_dump(exclude_unset=True, exclude_none=True)

        if "role" in changes:
            check_assignable_role(actor, changes["role"])
        if target.role == UserRole.SUBSIDIARY_ADMIN and not actor.is_mhc_admin:
            if target.id != actor.id:
                raise PermissionDeniedError("Only MHC admins can modify subsidiary admins")
        if "password" in changes:
            if not changes["password"].strip():
                raise ValidationError("password", "Field is required")
            changes["password"] = hash_password(changes["password"])

        user = await self._user_store.update_user(user_id, changes)
        await log_activity(
            self._activity_log_store,
            "user_updated",
            f"Updated {user.username}: {', '.join(sorted(changes)) or 'no changes'}",
            user=actor,
            subsidiary_id=subsidiary_id,
        )
        return user

    async def delete(self, actor: User, subsidiary_id: int, user_id: int) -> None:
        target = await self._get_member(subsidiary_id, user_id)
        if target.id == actor.id:
            raise PermissionDeniedError("Users cannot delete themselves")
        if target.role == UserRole.SUBSIDIARY_ADMIN and not actor.is_mhc_admin:
            raise PermissionDeniedError("Only MHC admins can delete subsidiary admins")

        await self._user_store.delete_user(user_id)
        await log_activity(
            self._activity_log_store,
            "user_deleted",
            f"Deleted {target.username}",
            user=actor,
            subsidiary_id=subsidiary_id,
        )
        logger.info("subsidiary_user_deleted", user_id=user_id, subsidiary_id=subsidiary_id)
