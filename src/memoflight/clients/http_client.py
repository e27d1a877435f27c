"""Async HTTP client whose GET requests are memoized.

JSON and text reads go through separate `Memoizer` instances keyed by the
URL and its normalized query parameters, so repeated requests inside the
TTL are served from memory and concurrent identical requests share a
single round trip. Errors are translated to the package error types and
are never cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from ..core.errors import ExternalServiceError, NotFoundError, ValidationError
from ..core.memoize import Memoizer
from ..core.models import MemoStats


@dataclass(frozen=True, slots=True)
class _RequestKey:
    # Query params are sorted so equivalent requests share one cache slot
    url: str
    params: Tuple[Tuple[str, str], ...]


def _normalize_params(params: Optional[Mapping[str, Any]]) -> Tuple[Tuple[str, str], ...]:
    return tuple(sorted((str(k), str(v)) for k, v in dict(params or {}).items()))


def _request_key(url: str, *, params: Optional[Mapping[str, Any]] = None) -> _RequestKey:
    return _RequestKey(url=url.strip(), params=_normalize_params(params))


class CachedHttpClient:
    """Memoized GET client.

    Purpose:
      - get_json(url, params=None) -> Any
      - get_text(url, params=None) -> str

    Key behavior:
      - Results are cached for `cache_ttl_seconds`, at most `cache_maxsize` per kind.
      - With `prefetch_seconds`, near-expiry hits refresh in the background.
      - 404 raises NotFoundError; other failures raise ExternalServiceError.
    """

    USER_AGENT = "memoflight"

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout: float = 20.0,
        verify: bool = True,
        cache_ttl_seconds: float = 60.0,
        cache_maxsize: int = 100,
        prefetch_seconds: Optional[float] = None,
    ) -> None:
        self._base_url = (base_url or "").rstrip("/")
        self._timeout = float(timeout)
        self._verify = bool(verify)

        memo_kwargs: Dict[str, Any] = {
            "ttl_seconds": cache_ttl_seconds,
            "max_items": cache_maxsize,
            "key_fn": _request_key,
            "prefetch_seconds": prefetch_seconds or None,
        }
        self._json = Memoizer(self._fetch_json, **memo_kwargs)
        self._text = Memoizer(self._fetch_text, **memo_kwargs)

    async def get_json(self, url: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        """GET `url` and return the decoded JSON body (memoized)."""
        return await self._json(self._validate_url(url), params=params)

    async def get_text(self, url: str, *, params: Optional[Mapping[str, Any]] = None) -> str:
        """GET `url` and return the body as text (memoized)."""
        return await self._text(self._validate_url(url), params=params)

    def stats(self) -> Dict[str, MemoStats]:
        return {"json": self._json.stats(), "text": self._text.stats()}

    async def drain(self) -> None:
        await self._json.drain()
        await self._text.drain()

    # --- uncached operations ---

    async def _fetch_json(self, url: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        resp = await self._get(url, params=params)
        try:
            return resp.json()
        except ValueError as e:
            raise ExternalServiceError(f"Invalid JSON from {url}: {e}") from e

    async def _fetch_text(self, url: str, *, params: Optional[Mapping[str, Any]] = None) -> str:
        resp = await self._get(url, params=params)
        return resp.text or ""

    # --- HTTP helpers ---

    def _validate_url(self, url: str) -> str:
        clean = (url or "").strip()
        if not clean:
            raise ValidationError("URL is empty")
        return clean

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": self.USER_AGENT},
            timeout=self._timeout,
            verify=self._verify,
        )

    async def _get(self, url: str, *, params: Optional[Mapping[str, Any]] = None) -> httpx.Response:
        try:
            async with self._create_client() as client:
                resp = await client.get(url, params=dict(params or {}))
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"GET {url} failed: {e}") from e

        if resp.status_code == 404:
            raise NotFoundError(f"Resource not found: {url}")

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(f"GET {url} returned an error: {e}") from e
        return resp
