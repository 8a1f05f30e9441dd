"""Tests for the SQL subsidiary store."""

from unittest.mock import AsyncMock

import pytest

from subsidiary_manager.core.exceptions import (
    ConflictError,
    DuplicateTaxIdError,
    SubsidiaryNotFoundError,
    ValidationError,
)
from subsidiary_manager.infrastructure.storage import SQLSubsidiaryStore


class TestCreateSubsidiary:
    async def test_create_and_get(self, subsidiary_store, make_subsidiary):
        created = await subsidiary_store.create_subsidiary(make_subsidiary())

        assert created.id is not None
        assert created.status is True

        fetched = await subsidiary_store.get_subsidiary(created.id)
        assert fetched is not None
        assert fetched.tax_id == "TAX-001"
        assert fetched.city == "Springfield"

    async def test_duplicate_tax_id(self, subsidiary_store, make_subsidiary):
        await subsidiary_store.create_subsidiary(make_subsidiary())

        with pytest.raises(DuplicateTaxIdError) as exc_info:
            await subsidiary_store.create_subsidiary(make_subsidiary(name="Other"))
        assert isinstance(exc_info.value, ConflictError)

        assert len(await subsidiary_store.list_subsidiaries()) == 1

    @pytest.mark.parametrize("field", ["name", "tax_id", "email", "phone_number"])
    async def test_blank_required_field_rejected_before_database(self, make_subsidiary, field):
        db = AsyncMock()
        store = SQLSubsidiaryStore(db)

        with pytest.raises(ValidationError) as exc_info:
            await store.create_subsidiary(make_subsidiary(**{field: "  "}))

        assert exc_info.value.details["field"] == field
        db.insert.assert_not_called()

    async def test_empty_name_rejected(self, subsidiary_store, make_subsidiary):
        with pytest.raises(ValidationError):
            await subsidiary_store.create_subsidiary(make_subsidiary(name=""))
        assert await subsidiary_store.list_subsidiaries() == []


class TestReadSubsidiaries:
    async def test_get_missing_returns_none(self, subsidiary_store):
        assert await subsidiary_store.get_subsidiary(999) is None

    async def test_list_in_insertion_order(self, subsidiary_store, make_subsidiary):
        for i in range(3):
            await subsidiary_store.create_subsidiary(make_subsidiary(tax_id=f"T{i}", name=f"S{i}"))

        names = [s.name for s in await subsidiary_store.list_subsidiaries()]
        assert names == ["S0", "S1", "S2"]


class TestUpdateSubsidiary:
    async def test_toggle_status(self, subsidiary_store, subsidiary):
        updated = await subsidiary_store.update_subsidiary(subsidiary.id, {"status": False})
        assert updated.status is False
        assert updated.name == subsidiary.name

    async def test_update_missing(self, subsidiary_store):
        with pytest.raises(SubsidiaryNotFoundError):
            await subsidiary_store.update_subsidiary(999, {"name": "X"})

    async def test_update_to_taken_tax_id(self, subsidiary_store, subsidiary, other_subsidiary):
        with pytest.raises(DuplicateTaxIdError):
            await subsidiary_store.update_subsidiary(other_subsidiary.id, {"tax_id": "TAX-001"})

    async def test_unknown_field_rejected(self, subsidiary_store, subsidiary):
        with pytest.raises(ValidationError):
            await subsidiary_store.update_subsidiary(subsidiary.id, {"id": 5})

    async def test_blank_name_rejected(self, subsidiary_store, subsidiary):
        with pytest.raises(ValidationError):
            await subsidiary_store.update_subsidiary(subsidiary.id, {"name": ""})
