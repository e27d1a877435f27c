"""MCP tool exposing hit/miss counters of the memoized HTTP client."""

from __future__ import annotations

from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from ..clients.factory import build_http_client
from ..clients.http_client import CachedHttpClient


def register(mcp: FastMCP, *, http_client: Optional[CachedHttpClient] = None) -> None:
    client = http_client or build_http_client()

    @mcp.tool(name="cache_stats")
    async def cache_stats() -> Dict[str, Dict[str, Any]]:
        """Return per-cache counters (hits, misses, coalesced, prefetches, failures, size, in_flight)."""
        return {name: stats.as_dict() for name, stats in client.stats().items()}
