"""Tests for LRU cache."""

import pytest

from core.cache import LRUCache


@pytest.mark.unit
def test_get_set():
    cache = LRUCache[int](max_size=2)
    cache.set("a", 1)
    assert cache.get("a") == 1
    assert cache.get("missing") is None
    assert cache.stats.hits == 1
    assert cache.stats.misses == 1


@pytest.mark.unit
def test_eviction_is_least_recently_used():
    cache = LRUCache[int](max_size=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")
    cache.set("c", 3)

    assert "a" in cache
    assert "b" not in cache
    assert cache.stats.evictions == 1
    assert len(cache) == 2


@pytest.mark.unit
def test_get_or_compute_calls_factory_once():
    cache = LRUCache[str](max_size=4)
    calls = []

    def factory():
        calls.append(1)
        return "value"

    assert cache.get_or_compute("k", factory) == "value"
    assert cache.get_or_compute("k", factory) == "value"
    assert len(calls) == 1


@pytest.mark.unit
def test_delete_and_clear():
    cache = LRUCache[int]()
    cache.set("a", 1)
    assert cache.delete("a") is True
    assert cache.delete("a") is False
    cache.set("b", 2)
    cache.clear()
    assert len(cache) == 0
    assert cache.stats.size == 0


@pytest.mark.unit
def test_invalid_size():
    with pytest.raises(ValueError):
        LRUCache(max_size=0)


@pytest.mark.unit
def test_hit_rate():
    cache = LRUCache[int]()
    assert cache.stats.hit_rate == 0.0
    cache.set("a", 1)
    cache.get("a")
    cache.get("b")
    assert cache.stats.hit_rate == 0.5
    assert cache.stats.to_dict()["hits"] == 1
