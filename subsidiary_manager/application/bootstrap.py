"""
Default administrator bootstrap.

Runs shortly after startup and makes sure the MHC administrator account
exists. It never overwrites an existing account, so it is safe to run on
every boot.
"""

import asyncio

from subsidiary_manager.application.security import generate_password, hash_password
from subsidiary_manager.config import get_logger
from subsidiary_manager.config.settings import AuthSettings
from subsidiary_manager.core.entities import User, UserRole
from subsidiary_manager.core.exceptions import DuplicateUsernameError
from subsidiary_manager.core.interfaces import IUserStore

logger = get_logger(__name__)


async def bootstrap_default_admin(user_store: IUserStore, auth: AuthSettings) -> User | None:
    """
    Create the default mhc_admin account if it is missing.

    Returns the created user, or None when the account already existed.
    Without AUTH_ADMIN_PASSWORD a random password is generated and logged
    once so the operator can sign in and change it.
    """
    if await user_store.get_user_by_username(auth.admin_username) is not None:
        logger.debug("default_admin_exists", username=auth.admin_username)
        return None

    password = auth.admin_password
    if not password:
        password = generate_password()
        logger.warning(
            "default_admin_password_generated",
            username=auth.admin_username,
            initial_password=password,
        )

    try:
        user = await user_store.create_user(
            User(
                username=auth.admin_username,
                password=hash_password(password),
                role=UserRole.MHC_ADMIN,
                subsidiary_id=None,
            )
        )
    except DuplicateUsernameError:
        # Another worker created it first
        return None

    logger.info("default_admin_created", user_id=user.id, username=user.username)
    return user


async def run_delayed_bootstrap(user_store: IUserStore, auth: AuthSettings) -> None:
    """Wait for the configured delay, then bootstrap. Failures are logged."""
    await asyncio.sleep(auth.bootstrap_delay_seconds)
    try:
        await bootstrap_default_admin(user_store, auth)
    except Exception as e:
        logger.error("default_admin_bootstrap_failed", error=str(e))
