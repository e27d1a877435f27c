"""Single-flight memoization for async callables with optional prefetch.

A `Memoizer` wraps an async operation. Results are kept in a bounded
`TTLCache`; concurrent callers for the same key share one running task
tracked by an `InFlightRegistry`. When `prefetch_seconds` is set, a hit
whose remaining freshness dropped below that window starts a detached
refresh and still returns the cached value right away.

All cache and registry bookkeeping happens between awaits, so every
lookup-then-register step is atomic on the event loop.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

from .cache import CacheEntry, TTLCache
from .errors import ValidationError
from .inflight import InFlightRegistry
from .models import KeyFn, MemoOptions, MemoStats

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Shared by every call when no key_fn is configured
SINGLETON_KEY: Hashable = ("memoflight", "singleton")


class Memoizer(Generic[T]):
    """Awaitable wrapper around `op` with the same call signature.

    Failures are never cached: the exception raised by `op` reaches every
    caller coalesced on that attempt, unchanged, and the next call runs
    `op` again.
    """

    def __init__(
        self,
        op: Callable[..., Awaitable[T]],
        *,
        ttl_seconds: float = 60.0,
        max_items: int = 100,
        key_fn: Optional[KeyFn] = None,
        prefetch_seconds: Optional[float] = None,
    ) -> None:
        if not callable(op):
            raise ValidationError("Memoized operation must be callable")

        # Copy name/doc first so the wrapped object's __dict__ can't clobber our state
        functools.update_wrapper(self, op)

        self._op = op
        self._name = getattr(op, "__qualname__", None) or repr(op)
        self._options = MemoOptions(
            ttl_seconds=float(ttl_seconds),
            max_items=int(max_items),
            key_fn=key_fn,
            prefetch_seconds=prefetch_seconds,
        )
        self._cache: TTLCache[T] = TTLCache(
            ttl_seconds=self._options.ttl_seconds,
            maxsize=self._options.max_items,
        )
        self._inflight: InFlightRegistry[T] = InFlightRegistry()

        self._hits = 0
        self._misses = 0
        self._coalesced = 0
        self._prefetches = 0
        self._failures = 0

    @property
    def options(self) -> MemoOptions:
        return self._options

    async def __call__(self, *args: Any, **kwargs: Any) -> T:
        key = self._key_for(args, kwargs)

        entry = self._cache.get(key)
        if entry is not None:
            self._hits += 1
            if self._needs_prefetch(entry) and self._inflight.lookup(key) is None:
                self._prefetches += 1
                logger.debug("Prefetching %s for key %r", self._name, key)
                self._start(key, args, kwargs)
            return entry.value

        self._misses += 1
        task = self._inflight.lookup(key)
        if task is None:
            task = self._start(key, args, kwargs)
        else:
            self._coalesced += 1

        # Shield so one cancelled caller doesn't cancel the shared computation
        return await asyncio.shield(task)

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        # Allow decorating methods; the instance becomes the first argument
        if instance is None:
            return self
        return functools.partial(self, instance)

    def stats(self) -> MemoStats:
        return MemoStats(
            hits=self._hits,
            misses=self._misses,
            coalesced=self._coalesced,
            prefetches=self._prefetches,
            failures=self._failures,
            size=len(self._cache),
            in_flight=len(self._inflight),
        )

    async def drain(self, timeout_seconds: Optional[float] = None) -> None:
        """Wait for in-flight computations (foreground and prefetch) to finish.

        Tasks still running after `timeout_seconds` are cancelled. Cached
        entries are left untouched.
        """
        pending = [task for task in self._inflight.tasks() if not task.done()]
        if not pending:
            return

        _, still_pending = await asyncio.wait(pending, timeout=timeout_seconds)
        for task in still_pending:
            task.cancel()

        if still_pending:
            await asyncio.gather(*still_pending, return_exceptions=True)

    # --- internals ---

    def _key_for(self, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Hashable:
        key_fn = self._options.key_fn
        if key_fn is None:
            return SINGLETON_KEY
        return key_fn(*args, **kwargs)

    def _needs_prefetch(self, entry: CacheEntry[T]) -> bool:
        if not self._options.prefetch_enabled:
            return False
        remaining = self._options.ttl_seconds - entry.age()
        return remaining < float(self._options.prefetch_seconds or 0.0)

    def _start(self, key: Hashable, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> "asyncio.Task[T]":
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._compute(key, args, kwargs), name=f"memoflight:{self._name}")
        task.add_done_callback(self._on_done)

        # An eager task factory may already have finished (and cleaned up) the task
        if not task.done():
            self._inflight.begin(key, task)
        return task

    async def _compute(self, key: Hashable, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> T:
        try:
            value = await self._op(*args, **kwargs)
        except Exception:
            self._failures += 1
            raise
        else:
            self._cache.set(key, value)
            return value
        finally:
            self._inflight.end(key)

    def _on_done(self, task: "asyncio.Task[T]") -> None:
        # Retrieve the outcome so detached prefetch failures are never reported as unhandled
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.debug("Memoized call %s failed: %r", self._name, exc)


def memoize(
    op: Optional[Callable[..., Awaitable[T]]] = None,
    *,
    ttl_seconds: float = 60.0,
    max_items: int = 100,
    key_fn: Optional[KeyFn] = None,
    prefetch_seconds: Optional[float] = None,
) -> Any:
    """Wrap `op` in a `Memoizer`.

    Works as `memoize(op, ...)`, as a bare `@memoize` decorator and as
    `@memoize(ttl_seconds=..., ...)`.
    """

    def _decorator(fn: Callable[..., Awaitable[T]]) -> Memoizer[T]:
        return Memoizer(
            fn,
            ttl_seconds=ttl_seconds,
            max_items=max_items,
            key_fn=key_fn,
            prefetch_seconds=prefetch_seconds,
        )

    if op is None:
        return _decorator
    return _decorator(op)
