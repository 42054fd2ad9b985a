"""PostgreSQL repository over the compromised_emails table."""

import logging
import re
from typing import Optional

from ....core.exceptions import ConfigurationError
from ....core.value_objects import EmailIdentifier
from ..connection import DatabaseManager
from ..entities.compromised_record import CompromisedRecord
from ..entities.protocols import RecordStore
from ..utils.error_handling import store_error_handler

logger = logging.getLogger(__name__)

_TABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


class CompromisedEmailRepository(RecordStore):
    """Record store backed by a table with a unique index on ``email``.

    Each method issues exactly one query; failures surface as StoreError
    subclasses and are not retried here.
    """

    def __init__(
        self,
        database: DatabaseManager,
        table_name: str = "compromised_emails",
        query_timeout: Optional[float] = None,
    ):
        if not _TABLE_NAME.match(table_name):
            raise ConfigurationError(f"Invalid table name: {table_name!r}")
        self.database = database
        self.table_name = table_name
        self.query_timeout = query_timeout

        self._exists_query = f"SELECT EXISTS(SELECT 1 FROM {table_name} WHERE email = $1)"
        self._find_query = (
            f"SELECT email, breach_date, breach_source FROM {table_name} WHERE email = $1"
        )

    @store_error_handler("check compromised email")
    async def exists(self, identifier: EmailIdentifier) -> bool:
        result = await self.database.fetchval(
            self._exists_query, str(identifier), timeout=self.query_timeout
        )
        return bool(result)

    @store_error_handler("fetch compromised email")
    async def find(self, identifier: EmailIdentifier) -> Optional[CompromisedRecord]:
        row = await self.database.fetchrow(
            self._find_query, str(identifier), timeout=self.query_timeout
        )
        if row is None:
            return None
        return CompromisedRecord.from_row(row)

    async def health_check(self) -> bool:
        return await self.database.health_check()
