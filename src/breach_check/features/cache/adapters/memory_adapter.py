"""Memory cache backend adapter for breach-check."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..entities.protocols import Cache

logger = logging.getLogger(__name__)


@dataclass
class MemoryCacheEntry:
    """Memory cache entry with absolute expiration."""
    value: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        """Check if entry is expired at the given time."""
        return now >= self.expires_at


class MemoryAdapter(Cache):
    """In-process cache with TTL expiration.

    Intended for development and tests; entries live only as long as the
    process. When ``max_size`` is reached the entry closest to expiry is
    evicted first.
    """

    def __init__(self, max_size: Optional[int] = None, clock: Callable[[], float] = time.monotonic):
        if max_size is not None and max_size < 1:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self._clock = clock
        self._store: Dict[str, MemoryCacheEntry] = {}
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        return

    async def disconnect(self) -> None:
        async with self._lock:
            self._store.clear()

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._store[key]
                return None
            return entry.value

    async def set(self, key: str, value: str, ttl: int) -> bool:
        if ttl <= 0:
            logger.warning(f"Refusing to cache {key} with non-positive ttl {ttl}")
            return False

        async with self._lock:
            now = self._clock()
            if self.max_size and key not in self._store and len(self._store) >= self.max_size:
                self._evict(now)
            self._store[key] = MemoryCacheEntry(value=value, expires_at=now + ttl)
            return True

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return self._store.pop(key, None) is not None

    async def health_check(self) -> bool:
        return True

    def _evict(self, now: float) -> None:
        expired = [k for k, entry in self._store.items() if entry.is_expired(now)]
        for k in expired:
            del self._store[k]
        if len(self._store) >= self.max_size:
            soonest = min(self._store, key=lambda k: self._store[k].expires_at)
            del self._store[soonest]

    def __len__(self) -> int:
        return len(self._store)
