"""Database feature for breach-check: the durable record store.

- entities/: record entity and the RecordStore protocol
- repositories/: PostgreSQL implementation
- utils/: error translation and connection retry policy
"""

from .connection import DatabaseManager
from .entities import CompromisedRecord, RecordStore
from .repositories import CompromisedEmailRepository
from .utils import BackoffType, RetryPolicy

__all__ = [
    "DatabaseManager",
    "CompromisedRecord",
    "RecordStore",
    "CompromisedEmailRepository",
    "BackoffType",
    "RetryPolicy",
]
