"""Record store utilities: error translation and connection retry policy."""

from .error_handling import (
    CONNECTION_FAILURES,
    STORE_FAILURES,
    mask_dsn,
    store_error_handler,
    translate_store_error,
)
from .retry_policy import DEFAULT_CONNECT_POLICY, BackoffType, RetryPolicy

__all__ = [
    "CONNECTION_FAILURES",
    "STORE_FAILURES",
    "mask_dsn",
    "store_error_handler",
    "translate_store_error",
    "DEFAULT_CONNECT_POLICY",
    "BackoffType",
    "RetryPolicy",
]
