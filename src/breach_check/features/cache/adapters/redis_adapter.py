"""Redis cache backend adapter for breach-check."""

import asyncio
import logging
import time
from typing import Callable, Optional

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from ..entities.config import RedisCacheConfig
from ..entities.protocols import Cache

logger = logging.getLogger(__name__)

# Failures that downgrade an operation to a miss / no-op.
CACHE_FAILURES = (RedisError, OSError, asyncio.TimeoutError)
# A malformed REDIS_URL also only disables the cache.
CONNECT_FAILURES = CACHE_FAILURES + (ValueError,)


class RedisAdapter(Cache):
    """Redis cache backend adapter.

    Redis being unconfigured or unreachable is not an error: the adapter
    logs a warning and behaves as an always-empty cache until a reconnect
    attempt succeeds. Reconnects triggered by cache operations run as a
    background task owned by the adapter, at most once per
    ``reconnect_interval`` seconds, so they never spend a caller's time
    budget and are not interrupted when a caller gives up.
    """

    def __init__(
        self,
        config: RedisCacheConfig,
        client: Optional[Redis] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self.redis_client: Optional[Redis] = client
        self.pool: Optional[ConnectionPool] = None
        self.is_available = client is not None
        self.connection_attempted = client is not None
        self._last_attempt: Optional[float] = None
        self._clock = clock
        self._connect_lock = asyncio.Lock()
        self._reconnect_task: Optional[asyncio.Task] = None

    async def connect(self) -> None:
        """Create the connection pool and verify it with a ping."""
        async with self._connect_lock:
            if self.is_available and self.redis_client is not None:
                return

            self.connection_attempted = True
            self._last_attempt = self._clock()

            if not self.config.is_enabled:
                logger.info(
                    "Redis URL not configured (REDIS_URL environment variable not set). "
                    "Running without cache - every lookup will query the database."
                )
                return

            try:
                logger.info("Creating Redis connection pool...")
                self.pool = ConnectionPool.from_url(self.config.url, **self.config.to_pool_kwargs())
                self.redis_client = Redis(connection_pool=self.pool)
                await asyncio.wait_for(self.redis_client.ping(), timeout=self.config.connect_timeout)
                self.is_available = True
                logger.info("Redis connection established successfully")
            except CONNECT_FAILURES as e:
                logger.warning(
                    f"Redis connection failed: {e}. "
                    "Running without cache - every lookup will query the database."
                )
                await self._cleanup_failed_connection()
            except asyncio.CancelledError:
                await self._cleanup_failed_connection()
                raise

    async def _cleanup_failed_connection(self) -> None:
        """Clean up failed connection attempts."""
        self.is_available = False
        client, pool = self.redis_client, self.pool
        self.redis_client = None
        self.pool = None
        try:
            if client is not None:
                await client.aclose()
            if pool is not None:
                await pool.disconnect()
        except CACHE_FAILURES as e:
            logger.debug(f"Ignoring error while discarding Redis connection: {e}")

    async def disconnect(self) -> None:
        """Stop any pending reconnect and close the Redis connection."""
        task, self._reconnect_task = self._reconnect_task, None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait([task])

        if self.redis_client is not None:
            await self.redis_client.aclose()
            if self.pool is not None:
                await self.pool.disconnect()
            self.redis_client = None
            self.pool = None
            self.is_available = False
            logger.info("Redis connection closed")

    async def _get_client(self) -> Optional[Redis]:
        if self.is_available and self.redis_client is not None:
            return self.redis_client

        if not self.config.is_enabled:
            if not self.connection_attempted:
                await self.connect()
            return None

        self._schedule_reconnect()
        return None

    def _schedule_reconnect(self) -> None:
        if self._reconnect_task is not None and not self._reconnect_task.done():
            return

        if (
            self._last_attempt is not None
            and self._clock() - self._last_attempt < self.config.reconnect_interval
        ):
            return

        logger.debug("Scheduling background Redis reconnect")
        self._reconnect_task = asyncio.create_task(self.connect())

    def _make_key(self, key: str) -> str:
        return f"{self.config.key_prefix}{key}"

    async def get(self, key: str) -> Optional[str]:
        client = await self._get_client()
        if client is None:
            return None

        full_key = self._make_key(key)
        try:
            value = await asyncio.wait_for(client.get(full_key), timeout=self.config.command_timeout)
        except CACHE_FAILURES as e:
            logger.warning(f"Cache get error for key {full_key}: {e!r}")
            return None

        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        return value

    async def set(self, key: str, value: str, ttl: int) -> bool:
        client = await self._get_client()
        if client is None:
            return False

        if ttl <= 0:
            logger.warning(f"Refusing to cache {key} with non-positive ttl {ttl}")
            return False

        full_key = self._make_key(key)
        try:
            await asyncio.wait_for(client.setex(full_key, ttl, value), timeout=self.config.command_timeout)
            return True
        except CACHE_FAILURES as e:
            logger.warning(f"Cache set error for key {full_key}: {e!r}")
            return False

    async def delete(self, key: str) -> bool:
        client = await self._get_client()
        if client is None:
            return False

        full_key = self._make_key(key)
        try:
            result = await asyncio.wait_for(client.delete(full_key), timeout=self.config.command_timeout)
            return result > 0
        except CACHE_FAILURES as e:
            logger.warning(f"Cache delete error for key {full_key}: {e!r}")
            return False

    async def health_check(self) -> bool:
        """Check Redis health."""
        client = await self._get_client()
        if client is None:
            return False
        try:
            await asyncio.wait_for(client.ping(), timeout=self.config.command_timeout)
            return True
        except CACHE_FAILURES as e:
            logger.warning(f"Redis health check failed: {e!r}")
            return False
