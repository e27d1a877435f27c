"""Bounded in-memory TTL cache with LRU eviction.

Entries remember when they were created (monotonic clock). Reads of an
entry whose age reached the TTL behave like a miss, and the least recently
used key is evicted when a new key is inserted at capacity.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Generic, Hashable, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    # Result of one successful computation
    value: T
    created_at: float  # time.monotonic()

    def age(self, now: Optional[float] = None) -> float:
        return (time.monotonic() if now is None else now) - self.created_at


class TTLCache(Generic[T]):
    # OrderedDict keeps recency order: first item is the LRU key
    def __init__(self, *, ttl_seconds: float, maxsize: int) -> None:
        self._ttl = float(ttl_seconds)
        self._maxsize = max(1, int(maxsize))
        self._store: "OrderedDict[Hashable, CacheEntry[T]]" = OrderedDict()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def get(self, key: Hashable) -> Optional[CacheEntry[T]]:
        entry = self._store.get(key)
        if entry is None:
            return None

        if self._expired(entry):
            self._store.pop(key, None)
            return None

        # Mark as most recently used
        self._store.move_to_end(key, last=True)
        return entry

    def set(self, key: Hashable, value: T) -> CacheEntry[T]:
        entry = CacheEntry(value=value, created_at=time.monotonic())

        if key in self._store:
            self._store[key] = entry
            self._store.move_to_end(key, last=True)
            return entry

        # Make room before inserting so size never exceeds maxsize
        while len(self._store) >= self._maxsize:
            self._store.popitem(last=False)

        self._store[key] = entry
        return entry

    def __contains__(self, key: object) -> bool:
        entry = self._store.get(key)  # type: ignore[arg-type]
        return entry is not None and not self._expired(entry)

    def __len__(self) -> int:
        return len(self._store)

    def _expired(self, entry: CacheEntry[T]) -> bool:
        return entry.age() >= self._ttl
