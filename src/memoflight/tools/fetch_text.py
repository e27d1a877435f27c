"""MCP tool that fetches a text document through the memoized HTTP client.

Registers 'fetch_text', which truncates long bodies to max_chars.
"""

from __future__ import annotations

from typing import Optional

from mcp.server.fastmcp import FastMCP

from ..clients.factory import build_http_client
from ..clients.http_client import CachedHttpClient
from ..config import MAX_TEXT_CHARS
from ..core.errors import ValidationError

TRUNCATED_SUFFIX = "\n\n...[TRUNCATED]..."


def register(mcp: FastMCP, *, http_client: Optional[CachedHttpClient] = None) -> None:
    client = http_client or build_http_client()

    @mcp.tool(name="fetch_text")
    async def fetch_text(url: str, max_chars: int = MAX_TEXT_CHARS) -> str:
        """Fetch a URL and return its body as text.

        Params:
          - url: absolute URL, or a path relative to HTTP_BASE_URL (required).
          - max_chars: maximum characters to return (default from config).

        Returns:
          The body text. Longer bodies are cut to max_chars and the suffix
          "\\n\\n...[TRUNCATED]..." is appended.
        """
        if not url or not url.strip():
            raise ValidationError("Missing url")
        if max_chars < 1:
            raise ValidationError("max_chars must be >= 1")

        text = await client.get_text(url)
        if len(text) > max_chars:
            return text[:max_chars] + TRUNCATED_SUFFIX
        return text
