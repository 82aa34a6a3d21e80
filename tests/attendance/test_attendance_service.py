from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import numpy as np
import pytest

from face_attendance.attendance.ledger import AttendanceLedger
from face_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from face_attendance.attendance.service import AttendanceService
from face_attendance.core.enums import AttendanceStatus, Pose
from face_attendance.core.exceptions import AuthenticationFailedError, NotFoundError
from face_attendance.identities.model import EnrolledDescriptor, Identity
from face_attendance.matching.matcher import FaceMatcher


@dataclass
class InMemoryIdentities:
    by_id: dict

    def get_by_id(self, identity_id: str) -> Optional[Identity]:
        return self.by_id.get(identity_id)


def _service(threshold=0.6, clock=None):
    identity = Identity("u1", "A", (EnrolledDescriptor(Pose.FRONT, [0.0, 0.0]),))
    repo = InMemoryAttendanceRepository()
    svc = AttendanceService(InMemoryIdentities({"u1": identity}), AttendanceLedger(repo), FaceMatcher(threshold), clock=clock)
    return svc, repo


def test_check_in_then_out(fixed_now):
    svc, _ = _service()
    live = np.array([0.3, 0.4])  # distance 0.5

    rec = svc.check_in("u1", live, now=fixed_now)
    assert rec.status == AttendanceStatus.CHECKED_IN

    rec = svc.check_out("u1", live, now=fixed_now + timedelta(hours=1))
    assert rec.status == AttendanceStatus.CHECKED_OUT
    assert [s.duration_minutes for s in svc.get_sessions("u1")] == [60]


def test_same_threshold_governs_check_in_and_check_out(fixed_now):
    svc, repo = _service(threshold=0.4)
    live = np.array([0.3, 0.4])

    with pytest.raises(AuthenticationFailedError) as exc:
        svc.check_in("u1", live, now=fixed_now)
    assert exc.value.threshold == 0.4
    assert exc.value.score == pytest.approx(0.5)

    with pytest.raises(AuthenticationFailedError):
        svc.check_out("u1", live, now=fixed_now)
    assert repo.raw_documents() == []
    assert svc.threshold == 0.4


def test_unknown_identity(fixed_now):
    svc, _ = _service()

    with pytest.raises(NotFoundError):
        svc.check_in("nobody", np.zeros(2), now=fixed_now)


def test_clock_is_used_when_now_is_omitted(clock):
    svc, _ = _service(clock=clock)

    rec = svc.check_in("u1", np.zeros(2))

    assert rec.check_in_time == clock.now
    assert svc.get_today_record("u1").record_id == rec.record_id


def test_inactive_identity_is_treated_as_unknown(fixed_now):
    identity = Identity("u9", "Gone", (EnrolledDescriptor(Pose.FRONT, [0.0, 0.0]),), is_active=False)
    svc = AttendanceService(
        InMemoryIdentities({"u9": identity}),
        AttendanceLedger(InMemoryAttendanceRepository()),
        FaceMatcher(),
    )

    with pytest.raises(NotFoundError):
        svc.check_in("u9", np.zeros(2), now=fixed_now)
