"""Value objects for lookup identifiers.

An EmailIdentifier is the canonical form of a caller-supplied email
address: whitespace-trimmed, Unicode NFC-normalized, lower-cased and
syntactically valid. It is the only thing ever used as a cache key suffix
or a store query parameter.
"""

from dataclasses import dataclass
from typing import Optional

from email_validator import SPECIAL_USE_DOMAIN_NAMES, EmailNotValidError, validate_email

from ..exceptions import IdentifierValidationError, ValidationReason


@dataclass(frozen=True)
class EmailIdentifier:
    """Normalized email identifier value object."""
    value: str

    def __post_init__(self):
        object.__setattr__(self, 'value', _canonicalize(self.value))

    @classmethod
    def parse(cls, raw: Optional[str]) -> 'EmailIdentifier':
        """Build an identifier from untrusted input."""
        return cls(raw)

    @property
    def domain(self) -> str:
        """Domain part of the address."""
        return self.value.rsplit("@", 1)[1]

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __repr__(self) -> str:
        """Detailed representation."""
        return f"EmailIdentifier(value={self.value!r})"


# Reserved names such as ``localhost`` or ``*.local`` are refused by
# email-validator regardless of options; their syntax is checked with this
# label in place of the reserved suffix.
_RESERVED_STAND_IN = "example"


def _reserved_suffix(domain: str) -> Optional[str]:
    lowered = domain.lower()
    for name in SPECIAL_USE_DOMAIN_NAMES:
        if lowered == name or lowered.endswith("." + name):
            return name
    return None


def _parse_address(candidate: str) -> str:
    """Return the address in email-validator's normalized (NFC) form."""
    local, _, domain = candidate.rpartition("@")
    reserved = _reserved_suffix(domain) if local else None
    if reserved is not None:
        candidate = f"{local}@{domain[:len(domain) - len(reserved)]}{_RESERVED_STAND_IN}"

    validated = validate_email(
        candidate,
        check_deliverability=False,
        globally_deliverable=False,
        allow_quoted_local=True,
    )
    if reserved is None:
        return validated.normalized
    return f"{validated.normalized[:-len(_RESERVED_STAND_IN)]}{reserved}"


def _canonicalize(raw: Optional[str]) -> str:
    if raw is None:
        raise IdentifierValidationError(ValidationReason.EMPTY)
    if not isinstance(raw, str):
        raise IdentifierValidationError(
            ValidationReason.MALFORMED, detail=f"expected a string, got {type(raw).__name__}"
        )

    candidate = raw.strip()
    if not candidate:
        raise IdentifierValidationError(ValidationReason.EMPTY)

    try:
        # Syntax only; deliverability would need DNS.
        normalized = _parse_address(candidate)
    except EmailNotValidError as e:
        raise IdentifierValidationError(ValidationReason.MALFORMED, detail=str(e)) from e

    return normalized.lower()


def normalize(raw: Optional[str]) -> EmailIdentifier:
    """Canonicalize a raw email address.

    Args:
        raw: Caller-supplied address, possibly padded or mixed-case

    Returns:
        The normalized identifier

    Raises:
        IdentifierValidationError: EMPTY for blank input, MALFORMED for
            anything that is not a plain ``local-part@domain`` address
    """
    return EmailIdentifier.parse(raw)
