"""Tests for the LRU memo store."""

from __future__ import annotations

import pytest

from autoipc.stores import LRUCache


def test_get_reports_misses_and_hits() -> None:
    cache = LRUCache()
    assert cache.get("missing") == (False, None)

    cache.put("key", None)
    assert cache.get("key") == (True, None)


def test_evicts_least_recently_used_at_capacity() -> None:
    cache = LRUCache(limit=2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.get("a")
    cache.put("c", 3)

    assert "b" not in cache
    assert cache.get("a") == (True, 1)
    assert cache.get("c") == (True, 3)
    assert len(cache) == 2


def test_updating_existing_key_does_not_evict() -> None:
    cache = LRUCache(limit=2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("a", 10)

    assert len(cache) == 2
    assert cache.get("a") == (True, 10)
    assert cache.get("b") == (True, 2)


def test_zero_limit_is_unbounded() -> None:
    cache = LRUCache(limit=0)
    for index in range(500):
        cache.put(index, index)

    assert len(cache) == 500


def test_negative_limit_rejected() -> None:
    with pytest.raises(ValueError):
        LRUCache(limit=-1)


def test_clear_empties_cache() -> None:
    cache = LRUCache(limit=3)
    cache.put("a", 1)
    cache.clear()

    assert len(cache) == 0
    assert cache.limit == 3
