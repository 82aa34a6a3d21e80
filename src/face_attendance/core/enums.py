from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for route gating."""

    ADMIN = "admin"
    STAFF = "staff"


class Pose(str, Enum):
    """Head pose of an enrolled face descriptor."""

    FRONT = "front"
    LEFT = "left"
    RIGHT = "right"


class AttendanceStatus(str, Enum):
    """Persisted attendance status."""

    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"


class ConflictKind(str, Enum):
    """Why a ledger transition was refused."""

    ALREADY_CHECKED_IN = "AlreadyCheckedIn"
    ALREADY_CHECKED_OUT = "AlreadyCheckedOut"
    NO_CHECK_IN_FOUND = "NoCheckInFound"


class WriteOutcome(str, Enum):
    """Outcome of an atomic conditional write in a repository."""

    CREATED = "created"
    UPDATED = "updated"
    CONFLICT = "conflict"
    MISSING = "missing"
