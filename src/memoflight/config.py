"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
the defaults used by the HTTP client and the MCP server (cache TTL,
capacity, prefetch window, HTTP settings and log level). The memoization
engine itself does not read these.
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


# Memoization defaults for the embedded HTTP client
MEMO_TTL_SECONDS = _env_float("MEMO_TTL_SECONDS", 60.0)
MEMO_MAX_ITEMS = _env_int("MEMO_MAX_ITEMS", 100)
MEMO_PREFETCH_SECONDS = _env_float("MEMO_PREFETCH_SECONDS", 0.0)  # 0 disables prefetch

# Network / HTTP
HTTP_VERIFY = _env_bool("HTTP_VERIFY", True)
HTTP_TIMEOUT = _env_float("HTTP_TIMEOUT", 20.0)
HTTP_BASE_URL = os.environ.get("HTTP_BASE_URL", "").strip()

# Limits / output
MAX_TEXT_CHARS = _env_int("MAX_TEXT_CHARS", 200_000)

# Logging (stderr; stdout carries the stdio transport)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
