import types

import pytest

import memoflight.core.cache as cache_mod


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool registration."""

    def __init__(self) -> None:
        self.tools = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture
def fake_clock(monkeypatch):
    # Only the cache module sees the fake clock; the event loop keeps real time.
    t = {"now": 0.0}
    monkeypatch.setattr(cache_mod, "time", types.SimpleNamespace(monotonic=lambda: t["now"]))
    return t
