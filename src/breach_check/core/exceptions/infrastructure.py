"""Infrastructure exceptions for breach-check.

This module defines exceptions raised by the record store and the cache.
Store errors are fatal to a lookup; cache errors never leave the cache layer.
"""

from typing import Optional

from .base import BreachCheckError


# Record Store Errors
class StoreError(BreachCheckError):
    """Base class for record store failures.

    No authoritative answer can be produced when the store fails, so these
    propagate to the caller unchanged.
    """

    def __init__(self, message: str, identifier: Optional[str] = None, **kwargs):
        self.identifier = identifier
        details = kwargs.pop("details", None) or {}
        if identifier:
            details.setdefault("identifier", identifier)
        super().__init__(message, details=details, **kwargs)


class StoreConnectionError(StoreError):
    """Raised when the store cannot be reached or the pool cannot be created."""
    pass


class StoreTimeoutError(StoreError):
    """Raised when a store query exceeds its timeout."""

    def __init__(self, timeout_seconds: float, identifier: Optional[str] = None):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Record store query timed out after {timeout_seconds} seconds",
            identifier=identifier,
        )


class StoreQueryError(StoreError):
    """Raised when the store rejects or fails a query."""
    pass


# Cache Errors
class CacheError(BreachCheckError):
    """Base class for cache-related errors."""
    pass


class CacheSerializationError(CacheError):
    """Raised when a cached value cannot be encoded or decoded."""
    pass
