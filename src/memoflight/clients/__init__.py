from .http_client import CachedHttpClient

__all__ = ["CachedHttpClient"]
