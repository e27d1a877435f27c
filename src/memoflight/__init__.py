"""Async memoization with single-flight coalescing and background prefetch."""

from .core import MemoOptions, MemoStats, Memoizer, memoize

__all__ = ["MemoOptions", "MemoStats", "Memoizer", "memoize"]

__version__ = "0.1.0"
