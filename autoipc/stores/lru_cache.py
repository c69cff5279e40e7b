"""Bounded least-recently-used memo store."""

from __future__ import annotations

from collections import OrderedDict
from typing import Hashable, Optional, Tuple


class LRUCache:
    """Key-value store that evicts the least recently used entry at capacity.

    A ``limit`` of 0 leaves the cache unbounded.
    """

    def __init__(self, limit: int = 0) -> None:
        if limit < 0:
            raise ValueError("LRUCache limit cannot be negative")
        self._limit = limit
        self._entries: "OrderedDict[Hashable, object]" = OrderedDict()

    @property
    def limit(self) -> int:
        return self._limit

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get(self, key: Hashable) -> Tuple[bool, Optional[object]]:
        """Return ``(found, value)`` and mark the key as most recently used."""
        if key not in self._entries:
            return False, None
        self._entries.move_to_end(key)
        return True, self._entries[key]

    def put(self, key: Hashable, value: object) -> None:
        if key in self._entries:
            self._entries.move_to_end(key)
        elif self._limit > 0 and len(self._entries) >= self._limit:
            self._entries.popitem(last=False)
        self._entries[key] = value

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["LRUCache"]
