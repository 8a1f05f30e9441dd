"""SQL implementation of user storage."""

from typing import Any

from subsidiary_manager.config import get_logger
from subsidiary_manager.core.entities import User, UserRole
from subsidiary_manager.core.exceptions import (
    ConflictError,
    DuplicateUsernameError,
    UserNotFoundError,
    ValidationError,
)
from subsidiary_manager.core.interfaces import IUserStore
from subsidiary_manager.infrastructure.storage.sql.base import SQLStore, require_text

logger = get_logger(__name__)


def check_membership(role: UserRole | str, subsidiary_id: int | None) -> None:
    """Tenant users belong to exactly one subsidiary; MHC admins to none."""
    role = UserRole(role)
    if role == UserRole.MHC_ADMIN and subsidiary_id is not None:
        raise ValidationError("subsidiary_id", "MHC admins cannot belong to a subsidiary", subsidiary_id)
    if role != UserRole.MHC_ADMIN and subsidiary_id is None:
        raise ValidationError("subsidiary_id", f"A {role.value} user requires a subsidiary")


class SQLUserStore(SQLStore, IUserStore):
    """Users, keyed by id and unique on username."""

    table = "users"
    updatable = frozenset({"username", "password", "role", "subsidiary_id"})

    async def get_user(self, user_id: int) -> User | None:
        row = await self._db.fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))
        return User.model_validate(row) if row else None

    async def get_user_by_username(self, username: str) -> User | None:
        row = await self._db.fetch_one("SELECT * FROM users WHERE username = ?", (username,))
        return User.model_validate(row) if row else None

    async def create_user(self, user: User) -> User:
        require_text("username", user.username)
        require_text("password", user.password)
        check_membership(user.role, user.subsidiary_id)

        values = user.model_dump(exclude={"id"})
        values["role"] = user.role.value
        try:
            row = await self._db.insert("users", values)
        except ConflictError:
            raise DuplicateUsernameError(user.username) from None

        created = User.model_validate(row)
        logger.info(
            "user_created",
            user_id=created.id,
            role=created.role.value,
            subsidiary_id=created.subsidiary_id,
        )
        return created

    async def list_users(self) -> list[User]:
        rows = await self._db.fetch_all("SELECT * FROM users ORDER BY id")
        return [User.model_validate(row) for row in rows]

    async def list_users_by_subsidiary(self, subsidiary_id: int) -> list[User]:
        rows = await self._db.fetch_all(
            "SELECT * FROM users WHERE subsidiary_id = ? ORDER BY id", (subsidiary_id,)
        )
        return [User.model_validate(row) for row in rows]

    async def update_user(self, user_id: int, changes: dict[str, Any]) -> User:
        """Apply a partial update; role and membership are re-checked together."""
        changes = dict(changes)
        if "role" in changes:
            changes["role"] = UserRole(changes["role"]).value
        for field in ("username", "password"):
            if field in changes:
                require_text(field, changes[field])

        async with self._db.transaction() as tx:
            row = await tx.fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))
            if row is None:
                raise UserNotFoundError(user_id)

            merged = {**row, **changes}
            check_membership(merged["role"], merged["subsidiary_id"])

            if changes:
                sql, params = self._update_statement(user_id, changes)
                try:
                    await tx.execute(sql, params)
                except ConflictError:
                    raise DuplicateUsernameError(changes.get("username", "")) from None
                row = await tx.fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))

        logger.info("user_updated", user_id=user_id, fields=sorted(changes))
        return User.model_validate(row)

    async def delete_user(self, user_id: int) -> None:
        result = await self._db.execute("DELETE FROM users WHERE id = ?", (user_id,))
        if result.rowcount == 0:
            raise UserNotFoundError(user_id)
        logger.info("user_deleted", user_id=user_id)
