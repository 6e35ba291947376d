"""
Contract tests shared by every RefreshTokenStore adapter.

The in-memory and Redis (fakeredis) adapters run here; the SQL adapter is
covered in ``tests/unit/repositories`` because it needs the database fixture.
"""

from __future__ import annotations

import threading
from datetime import timedelta

import fakeredis
import pytest
from blogauth.infra.redis.redis_refresh_token_store import RedisRefreshTokenStore
from blogauth.services._shared.errors import NotFoundError
from blogauth.services._shared.ports import UNEXPECTED_TOKEN, InMemoryRefreshTokenStore


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture(params=["memory", "redis"])
def store(request, fake_redis):
    if request.param == "memory":
        return InMemoryRefreshTokenStore()
    return RedisRefreshTokenStore(r=fake_redis, ttl=timedelta(days=14))


def test_save_then_find_returns_owner(store):
    record = store.save(1, "rt-1")

    assert record.user_id == 1
    assert record.refresh_token == "rt-1"
    found = store.find_by_token("rt-1")
    assert found.user_id == 1
    assert found.refresh_token == "rt-1"


def test_save_replaces_previous_token(store):
    store.save(1, "rt-old")
    store.save(1, "rt-new")

    assert store.find_by_token("rt-new").user_id == 1
    with pytest.raises(NotFoundError):
        store.find_by_token("rt-old")


def test_unknown_token_reports_unexpected_token(store):
    with pytest.raises(NotFoundError) as excinfo:
        store.find_by_token("never-saved")
    assert str(excinfo.value) == UNEXPECTED_TOKEN


def test_lookup_is_exact_match(store):
    store.save(1, "rt-abc")
    for candidate in ("rt-ab", "rt-abcd", "RT-ABC", " rt-abc"):
        with pytest.raises(NotFoundError):
            store.find_by_token(candidate)


def test_delete_by_identity_removes_record(store):
    store.save(1, "rt-1")
    store.save(2, "rt-2")

    store.delete_by_identity(1)

    with pytest.raises(NotFoundError):
        store.find_by_token("rt-1")
    assert store.find_by_token("rt-2").user_id == 2


def test_delete_unknown_identity_is_noop(store):
    store.save(2, "rt-2")

    store.delete_by_identity(99)
    store.delete_by_identity(99)

    assert store.find_by_token("rt-2").user_id == 2


def test_token_string_belongs_to_last_writer(store):
    store.save(1, "rt-shared")
    store.save(2, "rt-shared")

    assert store.find_by_token("rt-shared").user_id == 2

    store.delete_by_identity(1)
    assert store.find_by_token("rt-shared").user_id == 2

    store.delete_by_identity(2)
    with pytest.raises(NotFoundError):
        store.find_by_token("rt-shared")


def test_concurrent_saves_leave_exactly_one_token(store):
    tokens = [f"rt-{i}" for i in range(20)]
    barrier = threading.Barrier(len(tokens))

    def _save(token: str) -> None:
        barrier.wait()
        store.save(1, token)

    threads = [threading.Thread(target=_save, args=(t,)) for t in tokens]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    live = []
    for token in tokens:
        try:
            live.append(store.find_by_token(token))
        except NotFoundError:
            continue
    assert len(live) == 1
    assert live[0].user_id == 1


# ------------------------------ Adapter specifics -----------------------------


def test_memory_store_len_counts_users():
    store = InMemoryRefreshTokenStore()
    store.save(1, "a")
    store.save(1, "b")
    store.save(2, "c")
    assert len(store) == 2


def test_redis_store_applies_ttl_and_cleans_reverse_index(fake_redis):
    store = RedisRefreshTokenStore(r=fake_redis, ttl=timedelta(days=14))
    store.save(1, "rt-old")
    store.save(1, "rt-new")

    keys = sorted(k.decode() for k in fake_redis.keys("rt:*"))
    assert len(keys) == 2  # user key + reverse index of the live token
    assert "rt:u:1" in keys
    assert 0 < fake_redis.ttl("rt:u:1") <= int(timedelta(days=14).total_seconds())

    store.delete_by_identity(1)
    assert fake_redis.keys("rt:*") == []


def test_redis_store_never_keeps_raw_token_in_keys(fake_redis):
    store = RedisRefreshTokenStore(r=fake_redis)
    store.save(5, "secret-token-value")

    assert all(b"secret-token-value" not in k for k in fake_redis.keys("*"))
    assert fake_redis.ttl("rt:u:5") == -1  # no ttl configured


def test_redis_store_ignores_stale_reverse_index(fake_redis):
    store = RedisRefreshTokenStore(r=fake_redis)
    store.save(1, "rt-1")
    # A reverse entry whose user key moved on must not resolve
    fake_redis.set("rt:u:1", "rt-other")

    with pytest.raises(NotFoundError):
        store.find_by_token("rt-1")


def test_redis_store_takeover_drops_former_holder_key(fake_redis):
    store = RedisRefreshTokenStore(r=fake_redis)
    store.save(1, "rt-shared")
    store.save(2, "rt-shared")

    assert fake_redis.get("rt:u:1") is None
    assert fake_redis.get("rt:u:2") == b"rt-shared"
    assert fake_redis.get(store._kt("rt-shared")) == b"2"
