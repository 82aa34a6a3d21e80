from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Iterator

from .model import AttendanceRecord, Session


def duration_minutes(check_in_time: datetime, check_out_time: datetime) -> int:
    """Whole minutes between two timestamps, halves rounded up."""
    ms = (check_out_time - check_in_time).total_seconds() * 1000
    return int(math.floor(ms / 60000 + 0.5))


def reconstruct_sessions(records: Iterable[AttendanceRecord]) -> Iterator[Session]:
    """Yield a Session for every record with both timestamps.

    Open (or abandoned) records are skipped; they stay visible in the raw
    history. Pure: call again to iterate again.
    """

    for r in records:
        if r.check_in_time is None or r.check_out_time is None:
            continue
        yield Session(
            identity_id=r.identity_id,
            date=r.attendance_date or r.check_in_time,
            check_in_time=r.check_in_time,
            check_out_time=r.check_out_time,
            duration_minutes=duration_minutes(r.check_in_time, r.check_out_time),
        )


@dataclass(frozen=True)
class SessionSummary:
    sessions: int
    total_minutes: int

    @property
    def total_hours(self) -> float:
        return round(self.total_minutes / 60.0, 2)


def summarize_sessions(sessions: Iterable[Session]) -> SessionSummary:
    count = 0
    total = 0
    for s in sessions:
        count += 1
        total += s.duration_minutes
    return SessionSummary(sessions=count, total_minutes=total)
