"""LRU cache with TTL expiry.

Insertion order of an OrderedDict gives LRU behaviour (oldest first).
Expired entries are dropped when read; the least recently used entry is
evicted when a new key is stored at capacity.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from typing import Callable, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class LRUCache(Generic[T]):
    def __init__(
        self,
        max_entries: int = 1000,
        ttl_hours: float = 24,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: "OrderedDict[str, Tuple[T, float]]" = OrderedDict()
        self._max_entries = max_entries
        self._ttl_seconds = ttl_hours * 60 * 60
        self._clock = clock

    def get(self, key: str) -> Optional[T]:
        """Return the cached value, or ``None`` if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        data, stored_at = entry
        if self._clock() - stored_at > self._ttl_seconds:
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return data

    def set(self, key: str, data: T) -> None:
        self._entries.pop(key, None)
        if len(self._entries) >= self._max_entries:
            self._entries.popitem(last=False)
        self._entries[key] = (data, self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
