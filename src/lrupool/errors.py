from __future__ import annotations


class LRUPoolError(Exception):
    """Base error for the pooled LRU cache."""


class ValidationError(LRUPoolError, ValueError):
    """Raised when a size argument is invalid."""


class HandleError(LRUPoolError):
    """Raised when a list operation receives a handle it does not own."""
