"""Activity log helper shared by the mutating use cases and routes."""

from subsidiary_manager.config import get_logger
from subsidiary_manager.core.entities import ActivityLog, User
from subsidiary_manager.core.interfaces import IActivityLogStore

logger = get_logger(__name__)


async def log_activity(
    store: IActivityLogStore,
    action: str,
    details: str = "",
    *,
    user: User | None = None,
    subsidiary_id: int | None = None,
) -> ActivityLog:
    """Append an audit entry attributed to `user`."""
    if subsidiary_id is None and user is not None:
        subsidiary_id = user.subsidiary_id

    entry = await store.create_activity_log(
        ActivityLog(
            subsidiary_id=subsidiary_id,
            user_id=user.id if user else None,
            action=action,
            details=details,
        )
    )
    logger.debug("activity_logged", action=action, subsidiary_id=subsidiary_id)
    return entry
