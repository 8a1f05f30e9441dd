"""Tests for the default administrator bootstrap."""

import pytest

from subsidiary_manager.application.bootstrap import bootstrap_default_admin, run_delayed_bootstrap
from subsidiary_manager.application.security import verify_password
from subsidiary_manager.config.settings import AuthSettings
from subsidiary_manager.core.entities import UserRole
from subsidiary_manager.infrastructure.storage import SQLUserStore


@pytest.fixture
def user_store(db):
    return SQLUserStore(db)


async def test_creates_admin_with_configured_password(user_store):
    auth = AuthSettings(admin_username="root-admin", admin_password="s3cret")

    created = await bootstrap_default_admin(user_store, auth)

    assert created.role == UserRole.MHC_ADMIN
    assert created.subsidiary_id is None
    stored = await user_store.get_user_by_username("root-admin")
    assert stored.password != "s3cret"
    assert verify_password("s3cret", stored.password)


async def test_generates_password_when_unset(user_store):
    created = await bootstrap_default_admin(user_store, AuthSettings())

    assert created.username == "admin"
    assert created.password.startswith("$2")


async def test_idempotent(user_store):
    auth = AuthSettings(admin_password="s3cret")

    assert await bootstrap_default_admin(user_store, auth) is not None
    assert await bootstrap_default_admin(user_store, auth) is None
    assert len(await user_store.list_users()) == 1


async def test_existing_admin_is_not_overwritten(user_store):
    await bootstrap_default_admin(user_store, AuthSettings(admin_password="first"))
    await bootstrap_default_admin(user_store, AuthSettings(admin_password="second"))

    stored = await user_store.get_user_by_username("admin")
    assert verify_password("first", stored.password)


async def test_delayed_bootstrap_logs_failures(user_store, db):
    await db.close()

    # Closed database: the failure is logged, not raised
    await run_delayed_bootstrap(user_store, AuthSettings(bootstrap_delay_seconds=0))
