"""SQL implementation of subsidiary storage."""

from typing import Any

from subsidiary_manager.config import get_logger
from subsidiary_manager.core.entities import Subsidiary
from subsidiary_manager.core.exceptions import (
    ConflictError,
    DuplicateTaxIdError,
    SubsidiaryNotFoundError,
)
from subsidiary_manager.core.interfaces import ISubsidiaryStore
from subsidiary_manager.infrastructure.storage.sql.base import SQLStore, require_text

logger = get_logger(__name__)

REQUIRED_FIELDS = ("name", "tax_id", "email", "phone_number")


class SQLSubsidiaryStore(SQLStore, ISubsidiaryStore):
    """Subsidiaries, keyed by id and unique on tax_id."""

    table = "subsidiaries"
    updatable = frozenset(
        {
            "name",
            "tax_id",
            "email",
            "phone_number",
            "logo",
            "address",
            "city",
            "country",
            "status",
        }
    )

    async def get_subsidiary(self, subsidiary_id: int) -> Subsidiary | None:
        row = await self._db.fetch_one(
            "SELECT * FROM subsidiaries WHERE id = ?", (subsidiary_id,)
        )
        return Subsidiary.model_validate(row) if row else None

    async def list_subsidiaries(self) -> list[Subsidiary]:
        rows = await self._db.fetch_all("SELECT * FROM subsidiaries ORDER BY id")
        return [Subsidiary.model_validate(row) for row in rows]

    async def create_subsidiary(self, subsidiary: Subsidiary) -> Subsidiary:
        """Create a subsidiary after checking its required contact fields."""
        for field in REQUIRED_FIELDS:
            require_text(field, getattr(subsidiary, field))

        try:
            row = await self._db.insert(
                "subsidiaries",
                subsidiary.model_dump(exclude={"id"}),
            )
        except ConflictError:
            raise DuplicateTaxIdError(subsidiary.tax_id) from None

        created = Subsidiary.model_validate(row)
        logger.info("subsidiary_created", subsidiary_id=created.id, tax_id=created.tax_id)
        return created

    async def update_subsidiary(self, subsidiary_id: int, changes: dict[str, Any]) -> Subsidiary:
        """Apply a partial update. Required fields may change but not become blank."""
        for field in REQUIRED_FIELDS:
            if field in changes:
                require_text(field, changes[field])

        async with self._db.transaction() as tx:
            if changes:
                sql, params = self._update_statement(subsidiary_id, changes)
                try:
                    result = await tx.execute(sql, params)
                except ConflictError:
                    raise DuplicateTaxIdError(changes.get("tax_id", "")) from None
                if result.rowcount == 0:
                    raise SubsidiaryNotFoundError(subsidiary_id)

            row = await tx.fetch_one("SELECT * FROM subsidiaries WHERE id = ?", (subsidiary_id,))
            if row is None:
                raise SubsidiaryNotFoundError(subsidiary_id)

        logger.info(
            "subsidiary_updated",
            subsidiary_id=subsidiary_id,
            fields=sorted(changes),
        )
        return Subsidiary.model_validate(row)
