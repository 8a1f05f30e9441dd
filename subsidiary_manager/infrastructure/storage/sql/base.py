"""Shared plumbing for the engine-agnostic SQL stores."""

from typing import Any

from subsidiary_manager.core.exceptions import ValidationError
from subsidiary_manager.infrastructure.storage.database.base import Database


class SQLStore:
    """Base for stores that talk to a connected Database handle."""

    table: str = ""
    updatable: frozenset[str] = frozenset()

    def __init__(self, db: Database):
        self._db = db

    def _update_statement(
        self, row_id: int, changes: dict[str, Any], **managed: Any
    ) -> tuple[str, list[Any]]:
        """
        UPDATE ... SET for whitelisted columns only.

        `managed` columns (e.g. updated_at) are set by the store itself and
        bypass the whitelist.
        """
        for column in changes:
            if column not in self.updatable:
                raise ValidationError(column, "Field cannot be updated", column)

        values = {**changes, **managed}
        assignments = ", ".join(f"{column} = ?" for column in values)
        return (
            f"UPDATE {self.table} SET {assignments} WHERE id = ?",
            [*values.values(), row_id],
        )


def require_text(field: str, value: str | None) -> None:
    """Reject missing or blank strings."""
    if value is None or not str(value).strip():
        raise ValidationError(field, "Field is required", value)
