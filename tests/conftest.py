"""Pytest configuration and fixtures for breach-check tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from breach_check.core.value_objects import EmailIdentifier
from breach_check.features.cache import MemoryAdapter
from breach_check.features.database.entities import CompromisedRecord, RecordStore


COMPROMISED_EMAIL = "breach@example.com"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Controllable clock for TTL and reconnect tests."""
    return FakeClock()


@pytest.fixture
def memory_cache(clock):
    """In-memory cache driven by the fake clock."""
    return MemoryAdapter(clock=clock)


@pytest.fixture
def compromised_identifier():
    """Identifier seeded as compromised in the mock store."""
    return EmailIdentifier(COMPROMISED_EMAIL)


@pytest.fixture
def mock_store(compromised_identifier):
    """Record store double that knows a single compromised address."""
    store = MagicMock(spec=RecordStore)

    async def exists(identifier):
        return identifier == compromised_identifier

    async def find(identifier):
        if identifier == compromised_identifier:
            return CompromisedRecord(
                identifier=identifier,
                breach_source="Test Data Breach",
            )
        return None

    store.exists = AsyncMock(side_effect=exists)
    store.find = AsyncMock(side_effect=find)
    store.health_check = AsyncMock(return_value=True)
    return store


@pytest.fixture
def mock_database():
    """Mock DatabaseManager for repository tests."""
    mock_db = AsyncMock()
    mock_db.fetchrow = AsyncMock()
    mock_db.fetchval = AsyncMock()
    mock_db.health_check = AsyncMock(return_value=True)
    return mock_db
