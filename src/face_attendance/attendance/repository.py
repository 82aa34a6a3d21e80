from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence, Tuple

from .model import AttendanceQuery, AttendanceRecord, WriteResult


class AttendanceRepository(Protocol):
    """Storage interface of the attendance ledger.

    Mutations are atomic conditional writes: the repository, not the caller,
    decides whether a record already exists, and reports it as a WriteResult.
    Implementations normalize legacy shapes on read and write canonical ones.
    """

    def get_in_bucket(self, identity_id: str, bucket: Tuple[datetime, datetime]) -> Optional[AttendanceRecord]:
        """Record of identity whose check_in_time falls in [start, end)."""

        raise NotImplementedError

    def create_checkin(
        self,
        *,
        identity_id: str,
        check_in_time: datetime,
        bucket: Tuple[datetime, datetime],
    ) -> WriteResult:
        """CREATED with the new record, or CONFLICT with the existing one."""

        raise NotImplementedError

    def mark_checkout(self, *, record_id: str, check_out_time: datetime) -> WriteResult:
        """UPDATED, CONFLICT when already checked out, MISSING when gone."""

        raise NotImplementedError

    def list_for_identity(self, identity_id: str, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        """Newest check-in first."""

        raise NotImplementedError

    def query(self, q: AttendanceQuery) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
