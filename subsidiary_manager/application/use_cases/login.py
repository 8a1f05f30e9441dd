"""Login Use Case - verify credentials and open a session."""

from dataclasses import dataclass

from subsidiary_manager.application.security import new_session_id, verify_password
from subsidiary_manager.application.use_cases.activity import log_activity
from subsidiary_manager.config import get_logger
from subsidiary_manager.core.entities import AuthSession, User
from subsidiary_manager.core.exceptions import AuthenticationError
from subsidiary_manager.core.interfaces import IActivityLogStore, ISessionStore, IUserStore

logger = get_logger(__name__)


@dataclass
class LoginResult:
    """Authenticated user and their new session."""

    user: User
    session: AuthSession


class LoginUseCase:
    """Exchange a username and password for a server-side session."""

    def __init__(
        self,
        user_store: IUserStore,
        session_store: ISessionStore,
        activity_log_store: IActivityLogStore,
        session_ttl_seconds: int = 86400,
    ):
        self._user_store = user_store
        self._session_store = session_store
        self._activity_log_store = activity_log_store
        self._ttl = session_ttl_seconds

    async def execute(self, username: str, password: str) -> LoginResult:
        user = await self._user_store.get_user_by_username(username)
        # Same error for unknown user and bad password
        if user is None or not verify_password(password, user.password):
            logger.warning("login_failed", username=username)
            raise AuthenticationError("Invalid username or password")

        session = AuthSession.start(new_session_id(), user.id, self._ttl)  # type: ignore[arg-type]
        await self._session_store.set(session)
        await log_activity(self._activity_log_store, "login", f"{user.username} logged in", user=user)

        logger.info("login_succeeded", user_id=user.id, role=user.role.value)
        return LoginResult(user=user, session=session)
