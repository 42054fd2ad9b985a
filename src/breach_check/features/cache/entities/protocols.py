"""Cache protocols for breach-check.

The cache is an optimization, never a correctness dependency: adapters
report problems as misses (``None``) or failed writes (``False``) rather
than raising.
"""

from abc import abstractmethod
from enum import Enum
from typing import Optional, Protocol, runtime_checkable


class CacheBackend(str, Enum):
    """Supported cache backend types."""
    MEMORY = "memory"
    REDIS = "redis"


@runtime_checkable
class Cache(Protocol):
    """String-keyed cache with per-entry TTL."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the backend connection, if any."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Release backend resources."""
        ...

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the live value for key, or None on miss or unavailability."""
        ...

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int) -> bool:
        """Store value for ttl seconds, overwriting. False if not written."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove key. True if something was deleted."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Whether the backend is currently usable."""
        ...
