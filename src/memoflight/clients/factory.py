"""Builds the shared CachedHttpClient from environment configuration."""

from __future__ import annotations

from ..config import (
    HTTP_BASE_URL,
    HTTP_TIMEOUT,
    HTTP_VERIFY,
    MEMO_MAX_ITEMS,
    MEMO_PREFETCH_SECONDS,
    MEMO_TTL_SECONDS,
)
from .http_client import CachedHttpClient


def build_http_client() -> CachedHttpClient:
    return CachedHttpClient(
        base_url=HTTP_BASE_URL,
        timeout=HTTP_TIMEOUT,
        verify=HTTP_VERIFY,
        cache_ttl_seconds=MEMO_TTL_SECONDS,
        cache_maxsize=MEMO_MAX_ITEMS,
        prefetch_seconds=MEMO_PREFETCH_SECONDS,
    )
