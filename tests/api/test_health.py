"""Tests for health endpoints."""

from fastapi.testclient import TestClient

from subsidiary_manager.infrastructure.storage.database import set_database


def test_root_health_check(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


def test_api_health_check(client: TestClient):
    response = client.get("/api/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert "uptime_seconds" in data


def test_db_health_before_startup(client: TestClient):
    """No connected database: 503 with the reason, not a crash."""
    response = client.get("/api/health/db")
    assert response.status_code == 503

    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["error"] == "Database connection not established"


async def test_db_health_connected(db, async_client):
    set_database(db)

    response = await async_client.get("/api/health/db")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["engine"] == "sqlite"
    assert data["latency_ms"] >= 0


def test_request_id_header(client: TestClient):
    response = client.get("/api/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert "X-Response-Time" in response.headers


def test_database_routes_unavailable_before_startup(client: TestClient):
    """Store-backed routes answer 503 until the database is connected."""
    response = client.post("/api/login", json={"username": "a", "password": "b"})
    assert response.status_code == 503
    assert response.json()["error_code"] == "CONNECTION_ERROR"
