"""Immutable configuration and statistics models for the Memoizer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Optional

from .errors import ValidationError

KeyFn = Callable[..., Hashable]


@dataclass(frozen=True)
class MemoOptions:
    """Per-Memoizer configuration.

    Field groups:
    - Freshness: ttl_seconds, prefetch_seconds
    - Capacity: max_items
    - Keying: key_fn (None means every call shares one key)
    """

    ttl_seconds: float = 60.0
    max_items: int = 100
    key_fn: Optional[KeyFn] = None
    prefetch_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.ttl_seconds > 0:
            raise ValidationError(f"ttl_seconds must be > 0, got {self.ttl_seconds!r}")
        if int(self.max_items) < 1:
            raise ValidationError(f"max_items must be >= 1, got {self.max_items!r}")
        if self.prefetch_seconds is not None and (
            math.isnan(self.prefetch_seconds) or self.prefetch_seconds < 0
        ):
            raise ValidationError(f"prefetch_seconds must be >= 0, got {self.prefetch_seconds!r}")
        if self.key_fn is not None and not callable(self.key_fn):
            raise ValidationError("key_fn must be callable")

    @property
    def prefetch_enabled(self) -> bool:
        return bool(self.prefetch_seconds)


@dataclass(frozen=True)
class MemoStats:
    """Point-in-time counters for one Memoizer."""

    hits: int = 0
    misses: int = 0
    coalesced: int = 0
    prefetches: int = 0
    failures: int = 0
    size: int = 0
    in_flight: int = 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "coalesced": self.coalesced,
            "prefetches": self.prefetches,
            "failures": self.failures,
            "size": self.size,
            "in_flight": self.in_flight,
        }
