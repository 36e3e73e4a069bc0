"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed or out-of-range input to a value object or entity."""


class InvalidOperationError(DomainException):
    """A valid request made against an aggregate in the wrong state."""

    def __init__(self, message: str, current_status: str | None = None) -> None:
        super().__init__(message)
        self.current_status = current_status


class BusinessRuleViolationError(DomainException):
    """A state-valid request that breaks a domain policy."""

    def __init__(self, message: str, current_status: str | None = None) -> None:
        super().__init__(message)
        self.current_status = current_status


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class AuthenticationError(DomainException):
    """Credentials did not match a registered user."""


class AuthorizationError(DomainException):
    """The acting user lacks the permission an operation requires."""

    def __init__(self, message: str, required: str | None = None) -> None:
        super().__init__(message)
        self.required = required
