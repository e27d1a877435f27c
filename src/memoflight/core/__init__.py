from .cache import CacheEntry, TTLCache
from .errors import ExternalServiceError, MemoflightError, NotFoundError, ValidationError
from .inflight import InFlightRegistry
from .memoize import SINGLETON_KEY, Memoizer, memoize
from .models import MemoOptions, MemoStats

__all__ = [
    "CacheEntry",
    "ExternalServiceError",
    "InFlightRegistry",
    "MemoOptions",
    "MemoStats",
    "Memoizer",
    "MemoflightError",
    "NotFoundError",
    "SINGLETON_KEY",
    "TTLCache",
    "ValidationError",
    "memoize",
]
