from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value) -> Optional[datetime]:
    """Accept a datetime or an ISO-8601 string (a trailing 'Z' is allowed).

    Aware values are converted to naive server-local time, the convention used
    for every stored timestamp.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_naive_local(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return to_naive_local(datetime.fromisoformat(text))
    raise TypeError(f"Unsupported timestamp value: {value!r}")


def isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def now_local(tz_name: Optional[str] = None) -> datetime:
    """Current local time as a naive datetime.

    Note: Wrapped so tests can patch/mock easier. When tz_name is given the
    wall clock of that zone is used instead of the server's.
    """
    if tz_name:
        return datetime.now(tz=ZoneInfo(tz_name)).replace(tzinfo=None)
    return datetime.now()


def local_midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def day_bucket(moment: datetime) -> Tuple[datetime, datetime]:
    """Half-open interval [midnight, midnight + 1 day) containing moment."""
    start = local_midnight(moment)
    return start, start + timedelta(days=1)


def in_bucket(moment: Optional[datetime], bucket: Tuple[datetime, datetime]) -> bool:
    if moment is None:
        return False
    start, end = bucket
    return start <= moment < end


def to_naive_local(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)
