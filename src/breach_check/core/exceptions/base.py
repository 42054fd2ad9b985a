"""Base exceptions for breach-check.

This module defines the root of the breach-check exception hierarchy.
All exceptions inherit from BreachCheckError and carry an error code and
structured details so the HTTP layer can render them without string parsing.
"""

from typing import Any, Dict, Optional


class BreachCheckError(Exception):
    """Base exception for all breach-check errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code
    """
    from .http_mapping import get_http_status_code as get_mapped_status_code
    return get_mapped_status_code(exception)


def create_error_response(exception: BreachCheckError) -> Dict[str, Any]:
    """Create the error body returned to API clients.

    The shape matches the public API: a single ``error`` message, with the
    machine-readable code and details alongside it.

    Args:
        exception: The breach-check exception

    Returns:
        Error response dictionary
    """
    return {
        "error": exception.message,
        "code": exception.error_code,
        "details": exception.details,
    }
