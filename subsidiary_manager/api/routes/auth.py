"""Session login, logout and the current user."""

from fastapi import APIRouter, Depends, Request, Response, status

from subsidiary_manager.api.dependencies import (
    get_app_settings,
    get_current_user,
    get_login_use_case,
    get_session_store,
    set_session_cookie,
)
from subsidiary_manager.application.dto.requests import LoginRequest
from subsidiary_manager.application.dto.responses import ErrorResponse, UserResponse
from subsidiary_manager.application.use_cases import LoginUseCase
from subsidiary_manager.config import Settings
from subsidiary_manager.core.entities import User
from subsidiary_manager.core.interfaces import ISessionStore

router = APIRouter(prefix="/api", tags=["auth"])


@router.post(
    "/login",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(
    body: LoginRequest,
    response: Response,
    use_case: LoginUseCase = Depends(get_login_use_case),
    settings: Settings = Depends(get_app_settings),
) -> UserResponse:
    """Verify credentials and set the session cookie."""
    result = await use_case.execute(body.username, body.password)
    set_session_cookie(response, result.session.sid, settings)
    return UserResponse.from_entity(result.user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    request: Request,
    response: Response,
    user: User = Depends(get_current_user),
    session_store: ISessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """Destroy the session and clear the cookie."""
    cookie_name = settings.auth.session_cookie_name
    sid = request.cookies.get(cookie_name)
    if sid:
        await session_store.destroy(sid)
    response.delete_cookie(cookie_name)


@router.get(
    "/user",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}},
)
async def current_user(user: User = Depends(get_current_user)) -> UserResponse:
    """The logged-in user."""
    return UserResponse.from_entity(user)
