"""
Database connection management using asyncpg for the record store.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, Optional

import asyncpg
from asyncpg import Pool, Record

from ...core.exceptions import StoreConnectionError
from .utils.error_handling import STORE_FAILURES, mask_dsn
from .utils.retry_policy import DEFAULT_CONNECT_POLICY, RetryPolicy

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages the record store connection pool."""

    def __init__(
        self,
        database_url: str,
        retry_policy: RetryPolicy = DEFAULT_CONNECT_POLICY,
        pool_factory: Callable[..., Awaitable[Pool]] = asyncpg.create_pool,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        application_name: str = "breach-check",
        **pool_config
    ):
        """Initialize DatabaseManager.

        Args:
            database_url: PostgreSQL DSN
            retry_policy: Backoff applied while the pool cannot be created
            pool_factory: Coroutine creating the pool (asyncpg.create_pool)
            sleep: Coroutine used to wait between attempts
            application_name: Reported to PostgreSQL as application_name
            **pool_config: Additional pool configuration options
        """
        self.pool: Optional[Pool] = None
        self.dsn = database_url.replace("+asyncpg", "")
        self.retry_policy = retry_policy
        self.application_name = application_name
        self._pool_factory = pool_factory
        self._sleep = sleep
        self._pool_lock = asyncio.Lock()

        self.pool_config = {
            "min_size": 5,
            "max_size": 25,
            "max_inactive_connection_lifetime": 300,
            "command_timeout": 5,
            **pool_config
        }

    @classmethod
    def from_settings(cls, settings) -> "DatabaseManager":
        """Build from a BreachCheckSettings instance."""
        return cls(
            settings.get_database_url(),
            retry_policy=RetryPolicy.from_settings(settings),
            application_name=settings.app_name,
            **settings.get_pool_config()
        )

    async def create_pool(self) -> Pool:
        """Create and return the connection pool, retrying per the policy.

        Raises:
            StoreConnectionError: when every attempt failed
        """
        async with self._pool_lock:
            if self.pool is not None:
                return self.pool

            masked = mask_dsn(self.dsn)
            attempt = 0
            while True:
                attempt += 1
                try:
                    logger.info(
                        f"Creating database pool for {masked} "
                        f"(attempt {attempt}/{self.retry_policy.max_attempts})"
                    )
                    self.pool = await self._pool_factory(
                        self.dsn,
                        server_settings={"application_name": self.application_name},
                        **self.pool_config
                    )
                    logger.info("Database pool created successfully")
                    return self.pool
                except STORE_FAILURES as e:
                    logger.warning(
                        f"Failed to connect to database (attempt {attempt}/"
                        f"{self.retry_policy.max_attempts}): {e}"
                    )
                    if not self.retry_policy.should_retry(attempt):
                        raise StoreConnectionError(
                            f"Could not connect to record store after {attempt} attempts: {e}"
                        ) from e
                    await self._sleep(self.retry_policy.calculate_delay(attempt) / 1000)

    async def close_pool(self):
        """Close the connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def acquire(self):
        """Acquire a connection from the pool."""
        pool = self.pool or await self.create_pool()
        async with pool.acquire() as connection:
            yield connection

    async def fetchrow(self, query: str, *args, timeout: float = None) -> Optional[Record]:
        """Fetch a single row."""
        async with self.acquire() as connection:
            return await connection.fetchrow(query, *args, timeout=timeout)

    async def fetchval(self, query: str, *args, column: int = 0, timeout: float = None) -> Any:
        """Fetch a single value."""
        async with self.acquire() as connection:
            return await connection.fetchval(query, *args, column=column, timeout=timeout)

    async def health_check(self) -> bool:
        """Check database health."""
        try:
            result = await self.fetchval("SELECT 1", timeout=self.pool_config["command_timeout"])
            return result == 1
        except (StoreConnectionError,) + STORE_FAILURES as e:
            logger.error(f"Database health check failed: {e}")
            return False
