"""Registry of computations that are currently running, one per key.

The registry only records handles. Deciding whether a new computation may
start is up to the caller (the Memoizer checks `lookup` before `begin`).
"""

from __future__ import annotations

import asyncio
from typing import Dict, Generic, Hashable, List, Optional, TypeVar

T = TypeVar("T")


class InFlightRegistry(Generic[T]):
    def __init__(self) -> None:
        self._tasks: Dict[Hashable, "asyncio.Task[T]"] = {}

    def begin(self, key: Hashable, task: "asyncio.Task[T]") -> None:
        if key in self._tasks:
            raise RuntimeError(f"Computation already in flight for key: {key!r}")
        self._tasks[key] = task

    def lookup(self, key: Hashable) -> Optional["asyncio.Task[T]"]:
        return self._tasks.get(key)

    def end(self, key: Hashable) -> None:
        self._tasks.pop(key, None)

    def tasks(self) -> List["asyncio.Task[T]"]:
        return list(self._tasks.values())

    def __contains__(self, key: object) -> bool:
        return key in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)
