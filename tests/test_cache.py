import pytest

import memoflight.core.cache as cache_mod
from memoflight.core.cache import CacheEntry, TTLCache


@pytest.fixture
def now(monkeypatch):
    t = {"now": 0.0}

    def fake_monotonic():
        return t["now"]

    monkeypatch.setattr(cache_mod.time, "monotonic", fake_monotonic)
    return t


def test_ttlcache_set_get_and_expire(now):
    c = TTLCache(ttl_seconds=10.0, maxsize=10)

    c.set("k", "v")
    entry = c.get("k")
    assert entry is not None
    assert entry.value == "v"
    assert entry.created_at == 0.0

    now["now"] = 9.999
    assert c.get("k").value == "v"

    # age == ttl counts as expired
    now["now"] = 10.0
    assert c.get("k") is None
    assert len(c) == 0


def test_ttlcache_eviction_by_maxsize(now):
    c = TTLCache(ttl_seconds=100.0, maxsize=2)

    c.set("a", 1)
    c.set("b", 2)
    c.set("c", 3)

    assert len(c) == 2
    assert c.get("a") is None
    assert c.get("b").value == 2
    assert c.get("c").value == 3


def test_ttlcache_lru_touch_moves_to_end(now):
    c = TTLCache(ttl_seconds=100.0, maxsize=2)

    c.set("a", 1)
    c.set("b", 2)

    assert c.get("a").value == 1

    c.set("c", 3)

    assert c.get("a").value == 1
    assert c.get("b") is None
    assert c.get("c").value == 3


def test_ttlcache_replace_existing_key_refreshes_entry_and_recency(now):
    c = TTLCache(ttl_seconds=10.0, maxsize=2)

    c.set("a", 1)
    c.set("b", 2)

    now["now"] = 5.0
    c.set("a", 10)
    assert len(c) == 2

    # "b" is now the least recently used key
    c.set("c", 3)
    assert c.get("b") is None

    now["now"] = 12.0
    entry = c.get("a")
    assert entry.value == 10
    assert entry.created_at == 5.0


def test_ttlcache_contains_respects_ttl_without_touching_recency(now):
    c = TTLCache(ttl_seconds=10.0, maxsize=2)

    c.set("a", 1)
    c.set("b", 2)
    assert "a" in c

    c.set("c", 3)
    assert "a" not in c

    now["now"] = 10.0
    assert "b" not in c
    assert "missing" not in c


def test_ttlcache_clamps_maxsize():
    c = TTLCache(ttl_seconds=1.0, maxsize=0)
    assert c.maxsize == 1
    assert c.ttl_seconds == 1.0


def test_cache_entry_age(now):
    entry = CacheEntry(value="v", created_at=2.0)
    now["now"] = 5.5
    assert entry.age() == pytest.approx(3.5)
    assert entry.age(now=10.0) == pytest.approx(8.0)
