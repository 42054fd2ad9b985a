"""Standardized error handling utilities for record store operations."""

import asyncio
import functools
import logging
from typing import Any, Callable, Optional
from urllib.parse import urlsplit, urlunsplit

import asyncpg
from asyncpg import exceptions as pg_exceptions

from ....core.exceptions import (
    StoreConnectionError,
    StoreError,
    StoreQueryError,
    StoreTimeoutError,
)

logger = logging.getLogger(__name__)

CONNECTION_FAILURES = (
    pg_exceptions.PostgresConnectionError,
    pg_exceptions.CannotConnectNowError,
    pg_exceptions.TooManyConnectionsError,
    pg_exceptions.ConnectionDoesNotExistError,
    asyncpg.InterfaceError,
    OSError,
)

STORE_FAILURES = (asyncpg.PostgresError, asyncio.TimeoutError) + CONNECTION_FAILURES


def translate_store_error(
    error: BaseException,
    operation: str,
    identifier: Optional[str] = None,
    timeout: Optional[float] = None,
) -> StoreError:
    """Map a driver or OS exception to the store error taxonomy.

    Args:
        error: The exception raised by asyncpg or the socket layer
        operation: Name of the operation that failed
        identifier: Lookup identifier, for log and error context
        timeout: Timeout that applied to the operation, if any

    Returns:
        The StoreError to raise in its place
    """
    if isinstance(error, StoreError):
        return error

    # TimeoutError is an OSError subclass, so it must be matched first.
    if isinstance(error, (asyncio.TimeoutError, pg_exceptions.QueryCanceledError)):
        return StoreTimeoutError(timeout if timeout is not None else 0, identifier=identifier)

    if isinstance(error, CONNECTION_FAILURES):
        return StoreConnectionError(
            f"Record store unavailable during {operation}: {error}",
            identifier=identifier,
        )

    return StoreQueryError(
        f"Record store query failed during {operation}: {error}",
        identifier=identifier,
    )


def store_error_handler(operation_name: str, log_level: int = logging.ERROR):
    """Decorator translating failures of a repository method into StoreError.

    The wrapped method's first positional argument after ``self`` is taken
    as the lookup identifier for log context. The repository's
    ``query_timeout`` attribute, when present, is reported on timeouts.

    Usage:
        @store_error_handler("check existence")
        async def exists(self, identifier):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs) -> Any:
            identifier = str(args[0]) if args else kwargs.get("identifier")
            try:
                return await func(self, *args, **kwargs)
            except StoreError:
                raise
            except STORE_FAILURES as e:
                store_error = translate_store_error(
                    e,
                    operation_name,
                    identifier=str(identifier) if identifier is not None else None,
                    timeout=getattr(self, "query_timeout", None),
                )
                logger.log(
                    log_level,
                    f"Failed to {operation_name}: {store_error.message} | "
                    f"identifier={identifier}, error_type={type(e).__name__}"
                )
                raise store_error from e

        return wrapper
    return decorator


def mask_dsn(dsn: str) -> str:
    """Hide the password component of a database URL for logging."""
    try:
        parts = urlsplit(dsn)
    except ValueError:
        return "<unparseable dsn>"

    if parts.password is None:
        return dsn

    netloc = parts.netloc.rsplit("@", 1)[1]
    user = parts.username or ""
    return urlunsplit((parts.scheme, f"{user}:***@{netloc}", parts.path, parts.query, parts.fragment))
