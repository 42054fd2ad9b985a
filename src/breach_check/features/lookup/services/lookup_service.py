"""Lookup service - cache-aside breach lookups.

The record store is the single source of truth. The cache only ever holds
results of completed, successful store queries and may be empty, stale-evicted
or unreachable without changing any answer.

Concurrent lookups for the same cold key are not coalesced: each one misses
the cache and queries the store.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

from ....core.exceptions import CacheError, CacheSerializationError, StoreError, StoreTimeoutError
from ....core.value_objects import EmailIdentifier, normalize
from ...cache.entities.protocols import Cache, CacheBackend
from ...database.entities.protocols import RecordStore
from ..entities.lookup_result import LookupResult, cache_key, decode_result, encode_result

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 3600  # 1 hour


class LookupService:
    """Answers "has this email appeared in a breach?"."""

    def __init__(
        self,
        cache: Cache,
        store: RecordStore,
        cache_ttl: int = DEFAULT_CACHE_TTL,
        cache_timeout: float = 0.5,
        store_timeout: float = 5.0,
        include_source: bool = False,
        database=None,
    ):
        """Initialize the lookup service.

        Args:
            cache: Volatile cache used to short-circuit store queries
            store: Authoritative record store
            cache_ttl: Lifetime of cache entries in seconds
            cache_timeout: Upper bound for a single cache call in seconds
            store_timeout: Upper bound for a single store call in seconds
            include_source: Fetch the breach source along with the existence
                check so results carry it
            database: DatabaseManager owning the store's pool, managed by
                startup() and shutdown() when given
        """
        if cache_ttl <= 0:
            raise ValueError("cache_ttl must be positive")
        self.cache = cache
        self.store = store
        self.cache_ttl = cache_ttl
        self.cache_timeout = cache_timeout
        self.store_timeout = store_timeout
        self.include_source = include_source
        self.database = database

    @classmethod
    def from_settings(cls, settings) -> "LookupService":
        """Wire the cache, PostgreSQL and the service from BreachCheckSettings."""
        from ...cache.adapters.memory_adapter import MemoryAdapter
        from ...cache.adapters.redis_adapter import RedisAdapter
        from ...cache.entities.config import RedisCacheConfig
        from ...database.connection import DatabaseManager
        from ...database.repositories.compromised_email_repository import CompromisedEmailRepository

        database = DatabaseManager.from_settings(settings)
        store = CompromisedEmailRepository(
            database,
            table_name=settings.compromised_table,
            query_timeout=settings.store_timeout,
        )
        if settings.cache_backend == CacheBackend.MEMORY:
            cache = MemoryAdapter()
        else:
            cache = RedisAdapter(RedisCacheConfig.from_settings(settings))

        return cls(
            cache=cache,
            store=store,
            cache_ttl=settings.cache_ttl,
            cache_timeout=settings.cache_timeout,
            store_timeout=settings.store_timeout,
            include_source=settings.lookup_include_source,
            database=database,
        )

    async def startup(self) -> None:
        """Open backend connections.

        A store that cannot be reached after its retry policy is exhausted
        raises StoreConnectionError; an unreachable cache only logs.
        """
        if self.database is not None:
            await self.database.create_pool()
        await self.cache.connect()
        logger.info("Lookup service started")

    async def shutdown(self) -> None:
        """Close backend connections."""
        await self.cache.disconnect()
        if self.database is not None:
            await self.database.close_pool()
        logger.info("Lookup service stopped")

    async def check(self, raw: Optional[str]) -> LookupResult:
        """Look up a raw, caller-supplied email address.

        Raises:
            IdentifierValidationError: the input is empty or not an address;
                neither cache nor store is touched
            StoreError: the cache had no answer and the store failed
        """
        identifier = normalize(raw)
        key = cache_key(identifier)

        cached = await self._read_cache(key, identifier)
        if cached is not None:
            logger.info(f"Email {identifier} is compromised: {cached.compromised}, from cache: True")
            return cached

        compromised, source = await self._query_store(identifier)
        result = LookupResult(
            identifier=identifier,
            compromised=compromised,
            source=source,
            served_from_cache=False,
        )

        await self._write_cache(key, result)
        logger.info(f"Email {identifier} is compromised: {compromised}, from cache: False")
        return result

    async def _read_cache(self, key: str, identifier: EmailIdentifier) -> Optional[LookupResult]:
        try:
            raw = await asyncio.wait_for(self.cache.get(key), timeout=self.cache_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Cache read for {key} timed out after {self.cache_timeout}s, treating as miss")
            return None
        except CacheError as e:
            logger.warning(f"Cache read for {key} failed, treating as miss: {e}")
            return None

        if raw is None:
            return None

        try:
            return decode_result(raw, identifier)
        except CacheSerializationError as e:
            logger.warning(f"Ignoring unreadable cache entry {key}: {e}")
            return None

    async def _query_store(self, identifier: EmailIdentifier) -> Tuple[bool, Optional[str]]:
        try:
            if self.include_source:
                record = await asyncio.wait_for(self.store.find(identifier), timeout=self.store_timeout)
                return record is not None, record.breach_source if record is not None else None

            compromised = await asyncio.wait_for(self.store.exists(identifier), timeout=self.store_timeout)
            return bool(compromised), None
        except asyncio.TimeoutError as e:
            logger.error(f"Record store lookup timed out | identifier={identifier}, timeout={self.store_timeout}s")
            raise StoreTimeoutError(self.store_timeout, identifier=str(identifier)) from e
        except StoreError as e:
            logger.error(f"Record store lookup failed | identifier={identifier}, error={e.error_code}: {e.message}")
            raise

    async def _write_cache(self, key: str, result: LookupResult) -> None:
        try:
            written = await asyncio.wait_for(
                self.cache.set(key, encode_result(result), self.cache_ttl),
                timeout=self.cache_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Cache write for {key} timed out after {self.cache_timeout}s")
            return
        except CacheError as e:
            logger.warning(f"Cache write for {key} failed: {e}")
            return

        if not written:
            logger.debug(f"Cache write for {key} skipped (cache unavailable)")

    async def health(self) -> Dict[str, Any]:
        """Report backend health.

        The store being down makes the service unhealthy; the cache being
        down only degrades it.
        """
        cache_ok = await self._check_backend(self.cache.health_check(), self.cache_timeout)
        store_ok = await self._check_backend(self.store.health_check(), self.store_timeout)

        if not store_ok:
            status = "unhealthy"
        elif not cache_ok:
            status = "degraded"
        else:
            status = "healthy"

        return {"status": status, "cache": cache_ok, "store": store_ok}

    @staticmethod
    async def _check_backend(check, timeout: float) -> bool:
        try:
            return bool(await asyncio.wait_for(check, timeout=timeout))
        except (asyncio.TimeoutError, StoreError, CacheError) as e:
            logger.warning(f"Health check failed: {e!r}")
            return False
