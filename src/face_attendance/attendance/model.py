from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple, Union

from ..common.datetime_utils import day_bucket, isoformat
from ..core.enums import AttendanceStatus, WriteOutcome
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one identity's attendance for one day.

    Created by a check-in, mutated once by a check-out. The day bucket is
    derived from check_in_time and never stored separately.
    """

    record_id: str
    identity_id: str
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    legacy_entries: Tuple[Any, ...] = ()
    attendance_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def day_bucket(self) -> Optional[Tuple[datetime, datetime]]:
        if self.check_in_time is None:
            return None
        return day_bucket(self.check_in_time)

    @property
    def is_active(self) -> bool:
        return self.check_in_time is not None and self.check_out_time is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.record_id,
            "identity": self.identity_id,
            "checkInTime": isoformat(self.check_in_time),
            "checkOutTime": isoformat(self.check_out_time),
            "status": self.status.value,
            "legacyEntries": list(self.legacy_entries),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


@dataclass(frozen=True)
class Session:
    """Read-model: a completed check-in/check-out pair. Never persisted."""

    identity_id: str
    date: Union[date, datetime]
    check_in_time: datetime
    check_out_time: datetime
    duration_minutes: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identity": self.identity_id,
            "date": self.date.isoformat(),
            "checkInTime": self.check_in_time.isoformat(),
            "checkOutTime": self.check_out_time.isoformat(),
            "duration": self.duration_minutes,
        }


@dataclass(frozen=True)
class WriteResult:
    """Tagged outcome of a conditional repository write."""

    outcome: WriteOutcome
    record: Optional[AttendanceRecord] = None

    @property
    def ok(self) -> bool:
        return self.outcome in (WriteOutcome.CREATED, WriteOutcome.UPDATED)


@dataclass(frozen=True)
class AttendanceQuery:
    """Filters for administrative listings."""

    identity_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[AttendanceStatus] = None
    limit: Optional[int] = None

    def __post_init__(self):
        if self.limit is not None and self.limit < 1:
            raise ValidationError("limit must be a positive integer")
