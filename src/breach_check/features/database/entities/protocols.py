"""Record store protocols for breach-check."""

from abc import abstractmethod
from typing import Optional, Protocol, runtime_checkable

from ....core.value_objects import EmailIdentifier
from .compromised_record import CompromisedRecord


@runtime_checkable
class RecordStore(Protocol):
    """Authoritative existence oracle over compromised identifiers.

    Implementations raise StoreError subclasses on any failure; they never
    answer ``False`` for a query that did not complete.
    """

    @abstractmethod
    async def exists(self, identifier: EmailIdentifier) -> bool:
        """Exact-match existence check."""
        ...

    @abstractmethod
    async def find(self, identifier: EmailIdentifier) -> Optional[CompromisedRecord]:
        """Return the stored record for identifier, if any."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Whether the store is currently reachable."""
        ...
