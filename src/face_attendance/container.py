from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.ledger import AttendanceLedger
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_MATCH_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .identities.memory_identity_repository import InMemoryIdentityRepository
from .identities.mysql_identity_repository import MySQLIdentityRepository
from .identities.repository import IdentityRepository
from .matching.matcher import FaceMatcher


@dataclass(frozen=True)
class Container:
    identities_repo: IdentityRepository
    attendance_repo: AttendanceRepository

    matcher: FaceMatcher
    ledger: AttendanceLedger
    attendance_service: AttendanceService


def _assemble(
    identities_repo: IdentityRepository,
    attendance_repo: AttendanceRepository,
    *,
    match_threshold: float,
    clock: Optional[Callable[[], datetime]],
) -> Container:
    # One matcher (one threshold) serves both check-in and check-out.
    matcher = FaceMatcher(threshold=match_threshold)
    ledger = AttendanceLedger(attendance_repo)
    attendance_service = AttendanceService(identities_repo, ledger, matcher, clock=clock)

    return Container(
        identities_repo=identities_repo,
        attendance_repo=attendance_repo,
        matcher=matcher,
        ledger=ledger,
        attendance_service=attendance_service,
    )


def build_container(
    *,
    db_config: dict,
    match_threshold: float = DEFAULT_MATCH_THRESHOLD,
    clock: Optional[Callable[[], datetime]] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return _assemble(
        MySQLIdentityRepository(conn),
        MySQLAttendanceRepository(conn),
        match_threshold=match_threshold,
        clock=clock,
    )


def build_memory_container(
    *,
    identities_repo: Optional[InMemoryIdentityRepository] = None,
    attendance_repo: Optional[InMemoryAttendanceRepository] = None,
    match_threshold: float = DEFAULT_MATCH_THRESHOLD,
    clock: Optional[Callable[[], datetime]] = None,
) -> Container:
    return _assemble(
        identities_repo or InMemoryIdentityRepository(),
        attendance_repo or InMemoryAttendanceRepository(),
        match_threshold=match_threshold,
        clock=clock,
    )
