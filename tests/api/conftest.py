"""Fixtures for API tests: mocked stores behind dependency overrides."""

from collections.abc import AsyncGenerator, Callable
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from subsidiary_manager.api.dependencies import (
    get_activity_log_store,
    get_current_user,
    get_inventory_store,
    get_sales_store,
    get_session_store,
    get_subsidiary_store,
    get_user_store,
)
from subsidiary_manager.api.main import app
from subsidiary_manager.core.entities import Subsidiary, User

MISSING_SUBSIDIARY = 404


def _subsidiary(subsidiary_id: int) -> Subsidiary:
    return Subsidiary(
        id=subsidiary_id,
        name=f"Subsidiary {subsidiary_id}",
        tax_id=f"TAX-{subsidiary_id}",
        email="office@example.test",
        phone_number="+1 555 0100",
    )


@pytest.fixture
def stores() -> SimpleNamespace:
    """One AsyncMock per store; every subsidiary except 404 exists."""
    subsidiary_store = AsyncMock()

    async def get_subsidiary(subsidiary_id: int) -> Subsidiary | None:
        if subsidiary_id == MISSING_SUBSIDIARY:
            return None
        return _subsidiary(subsidiary_id)

    subsidiary_store.get_subsidiary.side_effect = get_subsidiary

    return SimpleNamespace(
        user=AsyncMock(),
        subsidiary=subsidiary_store,
        inventory=AsyncMock(),
        sales=AsyncMock(),
        activity=AsyncMock(),
        session=AsyncMock(),
    )


@pytest.fixture
def override_stores(stores):
    app.dependency_overrides[get_user_store] = lambda: stores.user
    app.dependency_overrides[get_subsidiary_store] = lambda: stores.subsidiary
    app.dependency_overrides[get_inventory_store] = lambda: stores.inventory
    app.dependency_overrides[get_sales_store] = lambda: stores.sales
    app.dependency_overrides[get_activity_log_store] = lambda: stores.activity
    app.dependency_overrides[get_session_store] = lambda: stores.session
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(override_stores) -> Callable[[User], None]:
    """Authenticate every request as the given user."""

    def _login(user: User) -> None:
        app.dependency_overrides[get_current_user] = lambda: user

    return _login


@pytest.fixture
async def async_client(override_stores) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def client() -> TestClient:
    """Synchronous client without the lifespan (no database startup)."""
    return TestClient(app)
