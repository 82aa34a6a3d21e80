from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterator, Optional, Sequence

from ..common.datetime_utils import day_bucket
from ..core.enums import ConflictKind, WriteOutcome
from ..core.exceptions import StateConflictError
from .model import AttendanceQuery, AttendanceRecord, Session
from .repository import AttendanceRepository
from .sessions import reconstruct_sessions

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Per identity and day: NoRecord -> CheckedIn -> CheckedOut.

    CheckedOut is terminal for the day. Callers must have verified the face
    before calling check_in/check_out; the ledger only enforces the state
    machine and relies on the repository's conditional writes for atomicity.
    """

    def __init__(self, repository: AttendanceRepository):
        self._repo = repository

    def check_in(self, identity_id: str, now: datetime) -> AttendanceRecord:
        bucket = day_bucket(now)
        result = self._repo.create_checkin(identity_id=identity_id, check_in_time=now, bucket=bucket)

        if result.outcome == WriteOutcome.CONFLICT:
            logger.info("check-in refused: identity=%s already checked in on %s", identity_id, bucket[0].date())
            raise StateConflictError(ConflictKind.ALREADY_CHECKED_IN)

        logger.info("checked in: identity=%s record=%s", identity_id, result.record.record_id)
        return result.record

    def active_record(self, identity_id: str, now: datetime) -> Optional[AttendanceRecord]:
        """Today's record, or yesterday's if it is still open.

        A session that started before midnight is still checked out against
        the day it was checked in.
        """

        today = day_bucket(now)
        record = self._repo.get_in_bucket(identity_id, today)
        if record is not None:
            return record

        previous = day_bucket(today[0] - timedelta(days=1))
        record = self._repo.get_in_bucket(identity_id, previous)
        if record is not None and record.is_active:
            return record
        return None

    def check_out(self, identity_id: str, now: datetime) -> AttendanceRecord:
        record = self.active_record(identity_id, now)
        if record is None:
            logger.info("check-out refused: identity=%s has no check-in", identity_id)
            raise StateConflictError(ConflictKind.NO_CHECK_IN_FOUND)
        if record.check_out_time is not None:
            logger.info("check-out refused: identity=%s record=%s already closed", identity_id, record.record_id)
            raise StateConflictError(ConflictKind.ALREADY_CHECKED_OUT)

        result = self._repo.mark_checkout(record_id=record.record_id, check_out_time=now)
        if result.outcome == WriteOutcome.CONFLICT:
            # Another request closed it between the read and the update.
            raise StateConflictError(ConflictKind.ALREADY_CHECKED_OUT)
        if result.outcome == WriteOutcome.MISSING:
            raise StateConflictError(ConflictKind.NO_CHECK_IN_FOUND)

        logger.info("checked out: identity=%s record=%s", identity_id, record.record_id)
        return result.record

    def today_record(self, identity_id: str, now: datetime) -> Optional[AttendanceRecord]:
        return self._repo.get_in_bucket(identity_id, day_bucket(now))

    def history(self, identity_id: str, *, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        return self._repo.list_for_identity(identity_id, limit)

    def sessions(self, identity_id: str) -> Iterator[Session]:
        return reconstruct_sessions(self.history(identity_id))

    def admin_list(self, query: AttendanceQuery) -> Sequence[AttendanceRecord]:
        return self._repo.query(query)
