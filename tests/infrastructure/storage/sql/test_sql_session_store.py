"""Tests for the database-backed session store."""

from datetime import timedelta

import pytest

from subsidiary_manager.core.entities import AuthSession, utcnow
from subsidiary_manager.infrastructure.storage import SQLSessionStore


@pytest.fixture
def session_store(db) -> SQLSessionStore:
    return SQLSessionStore(db)


async def test_set_and_get(session_store):
    session = AuthSession.start("sid-1", user_id=7, ttl_seconds=60)
    session.data["theme"] = "dark"
    await session_store.set(session)

    loaded = await session_store.get("sid-1")
    assert loaded.user_id == 7
    assert loaded.data == {"theme": "dark"}


async def test_set_replaces_existing(session_store):
    await session_store.set(AuthSession.start("sid-1", user_id=7, ttl_seconds=60))
    await session_store.set(AuthSession.start("sid-1", user_id=8, ttl_seconds=60))

    assert (await session_store.get("sid-1")).user_id == 8


async def test_unknown_sid(session_store):
    assert await session_store.get("nope") is None


async def test_expired_session_is_dropped(db, session_store):
    now = utcnow()
    await session_store.set(
        AuthSession(sid="old", user_id=1, expires_at=now - timedelta(seconds=1))
    )

    assert await session_store.get("old") is None
    assert await db.fetch_one("SELECT sid FROM sessions WHERE sid = ?", ("old",)) is None


async def test_destroy(session_store):
    await session_store.set(AuthSession.start("sid-1", user_id=7, ttl_seconds=60))
    await session_store.destroy("sid-1")
    assert await session_store.get("sid-1") is None


async def test_touch_extends_expiry(session_store):
    await session_store.set(AuthSession.start("sid-1", user_id=7, ttl_seconds=60))
    later = utcnow() + timedelta(days=2)

    await session_store.touch("sid-1", later)

    assert (await session_store.get("sid-1")).expires_at == later


async def test_prune_expired(session_store):
    now = utcnow()
    await session_store.set(AuthSession(sid="a", user_id=1, expires_at=now - timedelta(hours=1)))
    await session_store.set(AuthSession(sid="b", user_id=1, expires_at=now - timedelta(hours=2)))
    await session_store.set(AuthSession.start("c", user_id=1, ttl_seconds=3600))

    assert await session_store.prune_expired() == 2
    assert await session_store.get("c") is not None
