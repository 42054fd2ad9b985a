"""Record store repositories."""

from .compromised_email_repository import CompromisedEmailRepository

__all__ = ["CompromisedEmailRepository"]
