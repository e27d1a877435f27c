"""MCP tool that fetches a JSON document through the memoized HTTP client.

Registers 'fetch_json'. Repeated requests for the same URL and params
inside the cache TTL are answered from memory.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from ..clients.factory import build_http_client
from ..clients.http_client import CachedHttpClient
from ..core.errors import ValidationError


def register(mcp: FastMCP, *, http_client: Optional[CachedHttpClient] = None) -> None:
    client = http_client or build_http_client()

    @mcp.tool(name="fetch_json")
    async def fetch_json(url: str, params: Optional[Dict[str, str]] = None) -> Any:
        """Fetch a URL and return its decoded JSON body.

        Params:
          - url: absolute URL, or a path relative to HTTP_BASE_URL (required).
          - params: optional query parameters.

        Raises:
          ValidationError if url is empty; NotFoundError on 404;
          ExternalServiceError on other HTTP or decoding failures.
        """
        if not url or not url.strip():
            raise ValidationError("Missing url")

        return await client.get_json(url, params=params)
