"""Tests for the PostgreSQL compromised email repository."""

import asyncio
from datetime import datetime

import asyncpg
import pytest
from asyncpg import exceptions as pg_exceptions

from breach_check.core.exceptions import (
    ConfigurationError,
    StoreConnectionError,
    StoreQueryError,
    StoreTimeoutError,
)
from breach_check.core.value_objects import EmailIdentifier
from breach_check.features.database import CompromisedEmailRepository, CompromisedRecord, RecordStore


@pytest.fixture
def repository(mock_database):
    return CompromisedEmailRepository(mock_database, query_timeout=2.0)


class TestConstruction:

    def test_satisfies_record_store_protocol(self, repository):
        assert isinstance(repository, RecordStore)

    @pytest.mark.parametrize("table", ["public.compromised_emails", "breaches"])
    def test_accepts_plain_and_schema_qualified_tables(self, mock_database, table):
        assert CompromisedEmailRepository(mock_database, table_name=table).table_name == table

    @pytest.mark.parametrize("table", ["emails; DROP TABLE users", "1table", "a.b.c", ""])
    def test_rejects_unsafe_table_names(self, mock_database, table):
        with pytest.raises(ConfigurationError):
            CompromisedEmailRepository(mock_database, table_name=table)


class TestExists:

    @pytest.mark.asyncio
    async def test_exact_match_query(self, repository, mock_database):
        mock_database.fetchval.return_value = True

        assert await repository.exists(EmailIdentifier("Breach@Example.com")) is True
        mock_database.fetchval.assert_awaited_once_with(
            "SELECT EXISTS(SELECT 1 FROM compromised_emails WHERE email = $1)",
            "breach@example.com",
            timeout=2.0,
        )

    @pytest.mark.asyncio
    async def test_absent(self, repository, mock_database):
        mock_database.fetchval.return_value = False

        assert await repository.exists(EmailIdentifier("clean@example.com")) is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error, expected", [
        (OSError("connection refused"), StoreConnectionError),
        (pg_exceptions.CannotConnectNowError("starting up"), StoreConnectionError),
        (asyncpg.InterfaceError("pool is closing"), StoreConnectionError),
        (asyncio.TimeoutError(), StoreTimeoutError),
        (pg_exceptions.QueryCanceledError("statement timeout"), StoreTimeoutError),
        (pg_exceptions.UndefinedTableError("relation does not exist"), StoreQueryError),
    ])
    async def test_driver_errors_are_translated(self, repository, mock_database, error, expected):
        mock_database.fetchval.side_effect = error

        with pytest.raises(expected) as exc_info:
            await repository.exists(EmailIdentifier("a@example.com"))

        assert exc_info.value.identifier == "a@example.com"
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_timeout_reports_query_timeout(self, repository, mock_database):
        mock_database.fetchval.side_effect = asyncio.TimeoutError()

        with pytest.raises(StoreTimeoutError) as exc_info:
            await repository.exists(EmailIdentifier("a@example.com"))

        assert exc_info.value.timeout_seconds == 2.0

    @pytest.mark.asyncio
    async def test_store_errors_pass_through_untranslated(self, repository, mock_database):
        original = StoreConnectionError("pool exhausted")
        mock_database.fetchval.side_effect = original

        with pytest.raises(StoreConnectionError) as exc_info:
            await repository.exists(EmailIdentifier("a@example.com"))

        assert exc_info.value is original


class TestFind:

    @pytest.mark.asyncio
    async def test_returns_record(self, repository, mock_database):
        breached_at = datetime(2024, 1, 15, 12, 0, 0)
        mock_database.fetchrow.return_value = {
            "email": "breach@example.com",
            "breach_date": breached_at,
            "breach_source": "Test Data Breach",
        }

        record = await repository.find(EmailIdentifier("breach@example.com"))

        assert record == CompromisedRecord(
            identifier=EmailIdentifier("breach@example.com"),
            breach_date=breached_at,
            breach_source="Test Data Breach",
        )
        query = mock_database.fetchrow.await_args.args[0]
        assert query.startswith("SELECT email, breach_date, breach_source FROM compromised_emails")

    @pytest.mark.asyncio
    async def test_missing_row(self, repository, mock_database):
        mock_database.fetchrow.return_value = None

        assert await repository.find(EmailIdentifier("clean@example.com")) is None

    @pytest.mark.asyncio
    async def test_connection_failure(self, repository, mock_database):
        mock_database.fetchrow.side_effect = pg_exceptions.TooManyConnectionsError("too many")

        with pytest.raises(StoreConnectionError):
            await repository.find(EmailIdentifier("a@example.com"))


@pytest.mark.asyncio
async def test_health_check_delegates(repository, mock_database):
    mock_database.health_check.return_value = False

    assert await repository.health_check() is False
