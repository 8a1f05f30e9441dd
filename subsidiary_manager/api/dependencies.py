"""
Dependency injection container for FastAPI.

Provides stores, use cases and the authenticated user to route handlers.
Every store is built over the process-wide database handle, which raises
DatabaseConnectionError until startup has connected it.
"""

from datetime import timedelta

from fastapi import Depends, Request, Response

from subsidiary_manager.application.use_cases import (
    DatabaseConfigUseCase,
    GenerateReportUseCase,
    LoginUseCase,
    ManageUsersUseCase,
    RecordSaleUseCase,
)
from subsidiary_manager.config import Settings, get_settings
from subsidiary_manager.core.entities import Subsidiary, User, UserRole, utcnow
from subsidiary_manager.core.exceptions import (
    AuthenticationError,
    PermissionDeniedError,
    SubsidiaryNotFoundError,
)
from subsidiary_manager.core.interfaces import (
    IActivityLogStore,
    IInventoryStore,
    ISalesStore,
    ISessionStore,
    ISubsidiaryStore,
    IUserStore,
)
from subsidiary_manager.infrastructure.storage import (
    Database,
    SQLActivityLogStore,
    SQLInventoryStore,
    SQLSalesStore,
    SQLSubsidiaryStore,
    SQLUserStore,
    get_database,
)


def get_app_settings() -> Settings:
    """Get application settings."""
    return get_settings()


def get_db() -> Database:
    """Get the connected database handle."""
    return get_database()


# Store dependencies
def get_user_store(db: Database = Depends(get_db)) -> IUserStore:
    return SQLUserStore(db)


def get_subsidiary_store(db: Database = Depends(get_db)) -> ISubsidiaryStore:
    return SQLSubsidiaryStore(db)


def get_inventory_store(db: Database = Depends(get_db)) -> IInventoryStore:
    return SQLInventoryStore(db)


def get_sales_store(db: Database = Depends(get_db)) -> ISalesStore:
    return SQLSalesStore(db)


def get_activity_log_store(db: Database = Depends(get_db)) -> IActivityLogStore:
    return SQLActivityLogStore(db)


def get_session_store(request: Request) -> ISessionStore:
    """Session store chosen at startup (database or memory)."""
    return request.app.state.session_store


# Use case dependencies
def get_login_use_case(
    user_store: IUserStore = Depends(get_user_store),
    session_store: ISessionStore = Depends(get_session_store),
    activity_log_store: IActivityLogStore = Depends(get_activity_log_store),
    settings: Settings = Depends(get_app_settings),
) -> LoginUseCase:
    return LoginUseCase(
        user_store,
        session_store,
        activity_log_store,
        session_ttl_seconds=settings.auth.session_ttl_seconds,
    )


def get_record_sale_use_case(
    inventory_store: IInventoryStore = Depends(get_inventory_store),
    sales_store: ISalesStore = Depends(get_sales_store),
    activity_log_store: IActivityLogStore = Depends(get_activity_log_store),
) -> RecordSaleUseCase:
    return RecordSaleUseCase(inventory_store, sales_store, activity_log_store)


def get_manage_users_use_case(
    user_store: IUserStore = Depends(get_user_store),
    activity_log_store: IActivityLogStore = Depends(get_activity_log_store),
) -> ManageUsersUseCase:
    return ManageUsersUseCase(user_store, activity_log_store)


def get_report_use_case(
    sales_store: ISalesStore = Depends(get_sales_store),
    inventory_store: IInventoryStore = Depends(get_inventory_store),
    activity_log_store: IActivityLogStore = Depends(get_activity_log_store),
) -> GenerateReportUseCase:
    return GenerateReportUseCase(sales_store, inventory_store, activity_log_store)


def get_database_config_use_case(
    settings: Settings = Depends(get_app_settings),
) -> DatabaseConfigUseCase:
    return DatabaseConfigUseCase(settings)


# Authentication and authorization
def set_session_cookie(response: Response, sid: str, settings: Settings) -> None:
    response.set_cookie(
        settings.auth.session_cookie_name,
        sid,
        max_age=settings.auth.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.auth.cookie_secure,
    )


async def get_current_user(
    request: Request,
    response: Response,
    session_store: ISessionStore = Depends(get_session_store),
    user_store: IUserStore = Depends(get_user_store),
    settings: Settings = Depends(get_app_settings),
) -> User:
    """
    Resolve the session cookie to a user, or fail with 401.

    Sessions roll: every authenticated request pushes the expiry a full TTL
    ahead, in the store and on the cookie.
    """
    sid = request.cookies.get(settings.auth.session_cookie_name)
    if not sid:
        raise AuthenticationError()

    session = await session_store.get(sid)
    if session is None:
        raise AuthenticationError()

    user = await user_store.get_user(session.user_id)
    if user is None:
        # Account deleted while logged in
        await session_store.destroy(sid)
        raise AuthenticationError()

    session.expires_at = utcnow() + timedelta(seconds=settings.auth.session_ttl_seconds)
    await session_store.touch(sid, session.expires_at)
    set_session_cookie(response, sid, settings)

    request.state.session = session
    return user


async def require_mhc_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_mhc_admin:
        raise PermissionDeniedError()
    return user


async def require_subsidiary_access(
    subsidiary_id: int,
    user: User = Depends(get_current_user),
    subsidiary_store: ISubsidiaryStore = Depends(get_subsidiary_store),
) -> Subsidiary:
    """The path's subsidiary, if the user may see it."""
    if not user.can_access_subsidiary(subsidiary_id):
        raise PermissionDeniedError()

    subsidiary = await subsidiary_store.get_subsidiary(subsidiary_id)
    if subsidiary is None:
        raise SubsidiaryNotFoundError(subsidiary_id)
    return subsidiary


async def require_subsidiary_admin(
    subsidiary: Subsidiary = Depends(require_subsidiary_access),
    user: User = Depends(get_current_user),
) -> Subsidiary:
    """Like require_subsidiary_access, but staff are refused."""
    if user.role == UserRole.STAFF:
        raise PermissionDeniedError()
    return subsidiary
