"""Pytest fixtures for SQL store tests, backed by a migrated SQLite file."""

from decimal import Decimal

import pytest

from subsidiary_manager.core.entities import InventoryItem, Subsidiary, User, UserRole
from subsidiary_manager.infrastructure.storage import (
    SQLActivityLogStore,
    SQLInventoryStore,
    SQLSalesStore,
    SQLSubsidiaryStore,
    SQLUserStore,
)


@pytest.fixture
def subsidiary_store(db) -> SQLSubsidiaryStore:
    return SQLSubsidiaryStore(db)


@pytest.fixture
def user_store(db) -> SQLUserStore:
    return SQLUserStore(db)


@pytest.fixture
def inventory_store(db) -> SQLInventoryStore:
    return SQLInventoryStore(db)


@pytest.fixture
def sales_store(db) -> SQLSalesStore:
    return SQLSalesStore(db)


@pytest.fixture
def activity_log_store(db) -> SQLActivityLogStore:
    return SQLActivityLogStore(db)


def build_subsidiary(**overrides) -> Subsidiary:
    values = {
        "name": "Acme Ltd",
        "tax_id": "TAX-001",
        "email": "office@acme.test",
        "phone_number": "+1 555 0100",
        "city": "Springfield",
    }
    values.update(overrides)
    return Subsidiary(**values)


@pytest.fixture
def make_subsidiary():
    return build_subsidiary


@pytest.fixture
async def subsidiary(subsidiary_store) -> Subsidiary:
    return await subsidiary_store.create_subsidiary(build_subsidiary())


@pytest.fixture
async def other_subsidiary(subsidiary_store) -> Subsidiary:
    return await subsidiary_store.create_subsidiary(
        build_subsidiary(name="Globex", tax_id="TAX-002")
    )


@pytest.fixture
async def clerk(user_store, subsidiary) -> User:
    return await user_store.create_user(
        User(username="clerk", password="hash", role=UserRole.STAFF, subsidiary_id=subsidiary.id)
    )


@pytest.fixture
async def widget(inventory_store, subsidiary) -> InventoryItem:
    return await inventory_store.create_inventory(
        InventoryItem(
            subsidiary_id=subsidiary.id,
            name="Widget",
            quantity=10,
            cost_price=Decimal("2.00"),
            sale_price=Decimal("3.50"),
        )
    )
