"""Server bootstrap for the memoflight MCP service.

Creates the FastMCP instance, wires one shared memoized HTTP client into
the tools, and starts the MCP server (stdio transport).
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from ..clients.factory import build_http_client
from ..config import LOG_LEVEL
from ..tools.cache_stats import register as register_cache_stats
from ..tools.fetch_json import register as register_fetch_json
from ..tools.fetch_text import register as register_fetch_text

mcp = FastMCP("memoflight")


def register_tools() -> None:
    # One client so all tools share the same caches
    http_client = build_http_client()

    register_fetch_json(mcp, http_client=http_client)
    register_fetch_text(mcp, http_client=http_client)
    register_cache_stats(mcp, http_client=http_client)


def configure_logging() -> None:
    # stdout is the MCP transport; logs go to stderr
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


register_tools()


def main() -> None:
    configure_logging()
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
