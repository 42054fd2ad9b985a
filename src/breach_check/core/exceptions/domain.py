"""Domain exceptions for breach-check.

Errors caused by the caller's input or by the service configuration,
as opposed to failures of external systems.
"""

from enum import Enum

from .base import BreachCheckError


class ConfigurationError(BreachCheckError):
    """Raised when there's a configuration issue."""
    pass


class ValidationReason(str, Enum):
    """Why an identifier was rejected."""
    EMPTY = "EMPTY"
    MALFORMED = "MALFORMED"


class IdentifierValidationError(BreachCheckError):
    """Raised when a raw identifier cannot be normalized.

    Caller-input fault: surfaced as a client error and never retried.
    """

    MESSAGES = {
        ValidationReason.EMPTY: "Email is required",
        ValidationReason.MALFORMED: "Invalid email format",
    }

    def __init__(self, reason: ValidationReason, detail: str = ""):
        self.reason = ValidationReason(reason)
        details = {"reason": self.reason.value}
        if detail:
            details["detail"] = detail
        super().__init__(
            self.MESSAGES[self.reason],
            error_code=f"VALIDATION_{self.reason.value}",
            details=details,
        )
