"""Tests for the SQL user store."""

import pytest

from subsidiary_manager.core.entities import User, UserRole
from subsidiary_manager.core.exceptions import (
    DuplicateUsernameError,
    UserNotFoundError,
    ValidationError,
)


class TestCreateUser:
    async def test_create_and_lookup(self, user_store, subsidiary):
        user = await user_store.create_user(
            User(username="ann", password="h", role=UserRole.STAFF, subsidiary_id=subsidiary.id)
        )

        assert (await user_store.get_user(user.id)).username == "ann"
        by_name = await user_store.get_user_by_username("ann")
        assert by_name.id == user.id
        assert by_name.role == UserRole.STAFF

    async def test_duplicate_username(self, user_store, clerk, subsidiary):
        with pytest.raises(DuplicateUsernameError):
            await user_store.create_user(
                User(username="clerk", password="h", subsidiary_id=subsidiary.id)
            )

    async def test_staff_requires_subsidiary(self, user_store):
        with pytest.raises(ValidationError):
            await user_store.create_user(User(username="x", password="h", role=UserRole.STAFF))

    async def test_mhc_admin_cannot_have_subsidiary(self, user_store, subsidiary):
        with pytest.raises(ValidationError):
            await user_store.create_user(
                User(
                    username="boss",
                    password="h",
                    role=UserRole.MHC_ADMIN,
                    subsidiary_id=subsidiary.id,
                )
            )

    async def test_mhc_admin_without_subsidiary(self, user_store):
        user = await user_store.create_user(
            User(username="boss", password="h", role=UserRole.MHC_ADMIN)
        )
        assert user.subsidiary_id is None


class TestListUsers:
    async def test_filter_by_subsidiary(self, user_store, subsidiary, other_subsidiary):
        await user_store.create_user(User(username="a", password="h", subsidiary_id=subsidiary.id))
        await user_store.create_user(
            User(username="b", password="h", subsidiary_id=other_subsidiary.id)
        )
        await user_store.create_user(User(username="c", password="h", subsidiary_id=subsidiary.id))

        names = [u.username for u in await user_store.list_users_by_subsidiary(subsidiary.id)]
        assert names == ["a", "c"]
        assert len(await user_store.list_users()) == 3


class TestUpdateAndDeleteUser:
    async def test_update_role(self, user_store, clerk):
        updated = await user_store.update_user(clerk.id, {"role": "subsidiary_admin"})
        assert updated.role == UserRole.SUBSIDIARY_ADMIN

    async def test_promoting_to_mhc_admin_requires_leaving_subsidiary(self, user_store, clerk):
        with pytest.raises(ValidationError):
            await user_store.update_user(clerk.id, {"role": "mhc_admin"})

        updated = await user_store.update_user(
            clerk.id, {"role": "mhc_admin", "subsidiary_id": None}
        )
        assert updated.is_mhc_admin

    async def test_update_missing(self, user_store):
        with pytest.raises(UserNotFoundError):
            await user_store.update_user(999, {"username": "x"})

    async def test_delete(self, user_store, clerk):
        await user_store.delete_user(clerk.id)
        assert await user_store.get_user(clerk.id) is None

        with pytest.raises(UserNotFoundError):
            await user_store.delete_user(clerk.id)
