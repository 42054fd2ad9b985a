"""Compromised record entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ....core.value_objects import EmailIdentifier


@dataclass(frozen=True)
class CompromisedRecord:
    """A known-compromised email address as stored in the record store.

    Rows are inserted out-of-band by seed/import jobs; the lookup pipeline
    only reads them.
    """
    identifier: EmailIdentifier
    breach_date: Optional[datetime] = None
    breach_source: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'CompromisedRecord':
        """Build from a ``compromised_emails`` row."""
        return cls(
            identifier=EmailIdentifier(row["email"]),
            breach_date=row.get("breach_date"),
            breach_source=row.get("breach_source"),
        )
