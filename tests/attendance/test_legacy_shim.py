from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from face_attendance.attendance.ledger import AttendanceLedger
from face_attendance.attendance.legacy import document_from_record, record_from_document, record_from_row
from face_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from face_attendance.attendance.sessions import reconstruct_sessions
from face_attendance.core.enums import AttendanceStatus, ConflictKind
from face_attendance.core.exceptions import StateConflictError

OLD_ENTRIES = [
    {"type": "check_in", "timestamp": "2026-01-10T09:00:00", "task_description": "standup"},
    {"type": "check_out", "timestamp": "2026-01-10T18:00:00"},
]


@pytest.mark.parametrize("field", ["identity", "userId", "user_id"])
def test_identity_resolves_from_any_known_field(field):
    rec = record_from_document({"_id": "a1", field: "u1", "checkInTime": "2026-02-02T09:00:00"})

    assert rec.identity_id == "u1"


def test_canonical_identity_wins_over_legacy_names():
    rec = record_from_document({"identity": "new", "userId": "mid", "user_id": "old"})

    assert rec.identity_id == "new"


def test_time_entries_never_become_timestamps():
    rec = record_from_document(
        {
            "_id": "old1",
            "user_id": "u1",
            "attendance_date": "2026-01-10T00:00:00",
            "time_entries": OLD_ENTRIES,
            "total_work_duration": 540,
        }
    )

    assert rec.check_in_time is None
    assert rec.check_out_time is None
    assert rec.legacy_entries == tuple(OLD_ENTRIES)
    assert list(reconstruct_sessions([rec])) == []


def test_iso_strings_with_zulu_suffix_are_parsed():
    rec = record_from_document({"userId": "u1", "checkInTime": "2026-02-02T09:00:00Z", "checkOutTime": None})

    assert isinstance(rec.check_in_time, datetime)
    assert rec.check_in_time.tzinfo is None
    assert rec.status == AttendanceStatus.CHECKED_IN


def test_missing_status_is_derived_from_check_out():
    rec = record_from_document(
        {"userId": "u1", "checkInTime": datetime(2026, 2, 2, 9), "checkOutTime": datetime(2026, 2, 2, 17)}
    )

    assert rec.status == AttendanceStatus.CHECKED_OUT


def test_writes_use_canonical_names_only():
    rec = record_from_document({"_id": "a1", "userId": "u1", "checkInTime": datetime(2026, 2, 2, 9), "status": "checked-in"})

    doc = document_from_record(rec)

    assert doc["identity"] == "u1"
    assert "userId" not in doc and "user_id" not in doc and "time_entries" not in doc
    assert doc["legacyEntries"] == []
    assert doc["checkInTime"] == "2026-02-02T09:00:00"
    assert doc["checkOutTime"] is None


def test_sql_row_with_only_user_id():
    rec = record_from_row(
        {
            "attendance_id": 5,
            "identity_id": None,
            "user_id": "u9",
            "check_in_time": datetime(2026, 2, 2, 9),
            "check_out_time": None,
            "status": "checked-in",
            "legacy_entries": "[]",
        }
    )

    assert rec.record_id == "5"
    assert rec.identity_id == "u9"
    assert rec.legacy_entries == ()


def test_ledger_works_over_mixed_generations(fixed_now):
    repo = InMemoryAttendanceRepository(
        [
            {"_id": "old", "user_id": "u1", "attendance_date": "2026-01-10", "time_entries": OLD_ENTRIES},
            {"_id": "mid", "userId": "u1", "checkInTime": fixed_now.isoformat(), "status": "checked-in"},
        ]
    )
    ledger = AttendanceLedger(repo)

    with pytest.raises(StateConflictError) as exc:
        ledger.check_in("u1", fixed_now + timedelta(hours=1))
    assert exc.value.kind == ConflictKind.ALREADY_CHECKED_IN

    rec = ledger.check_out("u1", fixed_now + timedelta(hours=8))
    assert rec.record_id == "mid"
    assert rec.identity_id == "u1"

    raw = {d["_id"]: d for d in repo.raw_documents()}
    assert raw["old"]["time_entries"] == OLD_ENTRIES
    assert "checkInTime" not in raw["old"]

    history = ledger.history("u1")
    assert [r.record_id for r in history] == ["mid", "old"]
    assert [s.duration_minutes for s in ledger.sessions("u1")] == [480]
