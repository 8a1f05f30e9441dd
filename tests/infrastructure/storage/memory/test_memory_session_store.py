"""Tests for the in-process session store."""

from datetime import timedelta

from subsidiary_manager.core.entities import AuthSession, utcnow
from subsidiary_manager.infrastructure.storage import MemorySessionStore


async def test_set_and_get():
    store = MemorySessionStore()
    await store.set(AuthSession.start("sid", user_id=3, ttl_seconds=60))

    session = await store.get("sid")
    assert session.user_id == 3
    assert len(store) == 1


async def test_returns_copies():
    store = MemorySessionStore()
    await store.set(AuthSession.start("sid", user_id=3, ttl_seconds=60))

    session = await store.get("sid")
    session.data["mutated"] = True

    assert (await store.get("sid")).data == {}


async def test_expired_session_dropped_on_read():
    store = MemorySessionStore()
    await store.set(AuthSession(sid="old", user_id=1, expires_at=utcnow() - timedelta(seconds=1)))

    assert await store.get("old") is None
    assert len(store) == 0


async def test_destroy_unknown_is_noop():
    store = MemorySessionStore()
    await store.destroy("missing")
    assert len(store) == 0


async def test_touch():
    store = MemorySessionStore()
    await store.set(AuthSession.start("sid", user_id=1, ttl_seconds=1))
    later = utcnow() + timedelta(hours=1)

    await store.touch("sid", later)

    assert (await store.get("sid")).expires_at == later


async def test_prune_expired():
    store = MemorySessionStore()
    now = utcnow()
    await store.set(AuthSession(sid="a", user_id=1, expires_at=now - timedelta(minutes=1)))
    await store.set(AuthSession.start("b", user_id=1, ttl_seconds=60))

    assert await store.prune_expired() == 1
    assert len(store) == 1


async def test_periodic_sweep_on_write():
    store = MemorySessionStore(check_period_seconds=0)
    await store.set(AuthSession(sid="a", user_id=1, expires_at=utcnow() - timedelta(minutes=1)))
    await store.set(AuthSession.start("b", user_id=1, ttl_seconds=60))

    assert len(store) == 1
