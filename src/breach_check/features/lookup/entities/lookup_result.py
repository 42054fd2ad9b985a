"""Lookup result entity and its cache wire format.

Cached values are compact JSON objects::

    {"compromised":true,"identifier":"breach@example.com","source":null,"v":1}

stored under ``email:<identifier>``. Both the key format and this encoding
are shared with every process reading the same cache, so changes must bump
``CACHE_FORMAT_VERSION``; entries with any other version are ignored.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ....core.exceptions import CacheSerializationError
from ....core.value_objects import EmailIdentifier

CACHE_KEY_PREFIX = "email:"
CACHE_FORMAT_VERSION = 1

COMPROMISED_MESSAGE = (
    "This email appears in our database of compromised accounts. "
    "We recommend changing your password immediately."
)
CLEAN_MESSAGE = "This email does not appear in our database of compromised accounts."


@dataclass(frozen=True)
class LookupResult:
    """Answer to a single breach lookup."""
    identifier: EmailIdentifier
    compromised: bool
    source: Optional[str] = None
    served_from_cache: bool = False

    @property
    def message(self) -> str:
        """User-facing explanation of the result."""
        return COMPROMISED_MESSAGE if self.compromised else CLEAN_MESSAGE

    def to_response(self) -> Dict[str, Any]:
        """Public API representation."""
        response = {
            "email": str(self.identifier),
            "compromised": self.compromised,
            "message": self.message,
            "from_cache": self.served_from_cache,
        }
        if self.source is not None:
            response["source"] = self.source
        return response


def cache_key(identifier: EmailIdentifier) -> str:
    """Cache key for an identifier."""
    return f"{CACHE_KEY_PREFIX}{identifier}"


def encode_result(result: LookupResult) -> str:
    """Serialize a store-sourced result for the cache."""
    payload = {
        "v": CACHE_FORMAT_VERSION,
        "identifier": str(result.identifier),
        "compromised": result.compromised,
        "source": result.source,
    }
    return json.dumps(payload, separators=(",", ":"), sort_keys=True)


def decode_result(raw: str, identifier: EmailIdentifier) -> LookupResult:
    """Deserialize a cached value for ``identifier``.

    Raises:
        CacheSerializationError: if the value is not a current-format entry
            for exactly this identifier
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise CacheSerializationError(f"Cached value is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise CacheSerializationError("Cached value is not a JSON object")
    if payload.get("v") != CACHE_FORMAT_VERSION:
        raise CacheSerializationError(f"Unsupported cache format version: {payload.get('v')!r}")
    if payload.get("identifier") != str(identifier):
        raise CacheSerializationError("Cached value belongs to a different identifier")

    compromised = payload.get("compromised")
    if not isinstance(compromised, bool):
        raise CacheSerializationError("Cached value has no boolean 'compromised' field")

    source = payload.get("source")
    if source is not None and not isinstance(source, str):
        raise CacheSerializationError("Cached value has a non-string 'source' field")

    return LookupResult(
        identifier=identifier,
        compromised=compromised,
        source=source,
        served_from_cache=True,
    )
