"""Normalization between persisted attendance shapes and AttendanceRecord.

Two generations of records exist in storage:

- the current shape: ``identity`` (or ``userId``), scalar ``checkInTime`` /
  ``checkOutTime`` and ``status``;
- the older shape: ``user_id``, ``attendance_date`` and a free-form
  ``time_entries`` array.

Only this module knows about those names. Everything above the repositories
works on AttendanceRecord. ``time_entries`` is carried along untouched and is
never turned into check-in/check-out timestamps.
"""
from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..common.datetime_utils import isoformat, parse_iso_datetime
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord

IDENTITY_FIELDS = ("identity", "userId", "user_id")
LEGACY_ENTRY_FIELDS = ("legacyEntries", "time_entries")


def resolve_identity(doc: Mapping[str, Any]) -> Optional[str]:
    for name in IDENTITY_FIELDS:
        value = doc.get(name)
        if value is not None and value != "":
            return str(value)
    return None


def _legacy_entries(doc: Mapping[str, Any]) -> tuple:
    for name in LEGACY_ENTRY_FIELDS:
        value = doc.get(name)
        if value:
            return tuple(value)
    return ()


def _status(raw: Any, check_out_time: Optional[datetime]) -> AttendanceStatus:
    if raw:
        try:
            return AttendanceStatus(raw)
        except ValueError:
            pass
    return AttendanceStatus.CHECKED_OUT if check_out_time is not None else AttendanceStatus.CHECKED_IN


def record_from_document(doc: Mapping[str, Any]) -> AttendanceRecord:
    """Read a stored document of either generation."""
    check_in = parse_iso_datetime(doc.get("checkInTime"))
    check_out = parse_iso_datetime(doc.get("checkOutTime"))
    return AttendanceRecord(
        record_id=str(doc.get("_id") or doc.get("id") or ""),
        identity_id=resolve_identity(doc) or "",
        check_in_time=check_in,
        check_out_time=check_out,
        status=_status(doc.get("status"), check_out),
        legacy_entries=_legacy_entries(doc),
        attendance_date=parse_iso_datetime(doc.get("attendance_date")),
        created_at=parse_iso_datetime(doc.get("createdAt")),
        updated_at=parse_iso_datetime(doc.get("updatedAt")),
    )


def document_from_record(record: AttendanceRecord) -> Dict[str, Any]:
    """Write shape: canonical names only, legacy entries always present."""
    return {
        "_id": record.record_id,
        "identity": record.identity_id,
        "checkInTime": isoformat(record.check_in_time),
        "checkOutTime": isoformat(record.check_out_time),
        "status": record.status.value,
        "legacyEntries": list(record.legacy_entries),
        "createdAt": isoformat(record.created_at),
        "updatedAt": isoformat(record.updated_at),
    }


def record_from_row(row: Mapping[str, Any]) -> AttendanceRecord:
    """Read a SQL row; older rows may only carry user_id."""
    check_out = row.get("check_out_time")
    entries = row.get("legacy_entries")
    if isinstance(entries, (str, bytes, bytearray)):
        entries = json.loads(entries or "[]")
    return AttendanceRecord(
        record_id=str(row["attendance_id"]),
        identity_id=str(row.get("identity_id") or row.get("user_id") or ""),
        check_in_time=row.get("check_in_time"),
        check_out_time=check_out,
        status=_status(row.get("status"), check_out),
        legacy_entries=tuple(entries or ()),
        attendance_date=parse_iso_datetime(row.get("attendance_date")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )
