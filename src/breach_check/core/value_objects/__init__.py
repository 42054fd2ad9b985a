"""Value objects for breach-check."""

from .identifiers import EmailIdentifier, normalize

__all__ = [
    "EmailIdentifier",
    "normalize",
]
