from __future__ import annotations

from typing import Optional

from .enums import ConflictKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InputInvalidError(ValidationError):
    """Raised when the live descriptor is missing or malformed."""


class EnrollmentMissingError(ValidationError):
    """Raised when the identity has no enrolled face descriptors."""


class FormatMismatchError(ValidationError):
    """Raised when no enrolled descriptor has the live descriptor's length."""


class AuthenticationFailedError(DomainError):
    """Raised when the best match is farther than the configured threshold."""

    def __init__(self, message: str, *, score: float, threshold: float):
        super().__init__(message)
        self.score = score
        self.threshold = threshold


_CONFLICT_MESSAGES = {
    ConflictKind.ALREADY_CHECKED_IN: "Already checked-in for today",
    ConflictKind.ALREADY_CHECKED_OUT: "Already checked-out for today",
    ConflictKind.NO_CHECK_IN_FOUND: "No check-in record found for today",
}


class StateConflictError(DomainError):
    """Raised when a check-in/check-out transition is not allowed."""

    def __init__(self, kind: ConflictKind, message: Optional[str] = None):
        super().__init__(message or _CONFLICT_MESSAGES[kind])
        self.kind = kind


class NotFoundError(DomainError):
    """Raised when the identity is unknown."""


class StorageFailureError(DomainError):
    """Raised when the underlying store fails. Keeps the original cause."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
