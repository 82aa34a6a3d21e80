from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..core.exceptions import (
    AuthenticationFailedError,
    DomainError,
    EnrollmentMissingError,
    FormatMismatchError,
    InputInvalidError,
)


class RejectKind(str, Enum):
    INPUT_INVALID = "InputInvalid"
    ENROLLMENT_MISSING = "EnrollmentMissing"
    FORMAT_MISMATCH = "FormatMismatch"
    AUTHENTICATION_FAILED = "AuthenticationFailed"


@dataclass(frozen=True)
class Accept:
    score: float


@dataclass(frozen=True)
class Reject:
    kind: RejectKind
    threshold: float
    score: Optional[float] = None

    def to_error(self) -> DomainError:
        if self.kind == RejectKind.INPUT_INVALID:
            return InputInvalidError("Face descriptor must be a non-empty array of numbers")
        if self.kind == RejectKind.ENROLLMENT_MISSING:
            return EnrollmentMissingError("No face data registered for this user")
        if self.kind == RejectKind.FORMAT_MISMATCH:
            return FormatMismatchError("Face descriptor format does not match the registered face data")
        return AuthenticationFailedError(
            "Face verification failed. Try better lighting or face the camera directly.",
            score=float(self.score if self.score is not None else float("inf")),
            threshold=self.threshold,
        )


MatchResult = Union[Accept, Reject]
