"""Record store entities."""

from .compromised_record import CompromisedRecord
from .protocols import RecordStore

__all__ = ["CompromisedRecord", "RecordStore"]
