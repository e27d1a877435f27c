from __future__ import annotations


class MemoflightError(Exception):
    """Base error for memoflight."""


class ValidationError(MemoflightError):
    """Raised when configuration or user input is invalid."""


class ExternalServiceError(MemoflightError):
    """Raised when an external HTTP service fails."""


class NotFoundError(MemoflightError):
    """Raised when a requested remote resource is not found."""
