from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Sequence, Tuple

from ..core.enums import AttendanceStatus, WriteOutcome
from ..core.exceptions import StorageFailureError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .legacy import record_from_row
from .model import AttendanceQuery, AttendanceRecord, WriteResult
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, identity_id, user_id, check_in_time, check_out_time, status,
    legacy_entries, attendance_date, created_at, updated_at
"""

# Older rows only carry user_id.
_IDENTITY = "COALESCE(identity_id, user_id)"


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_by_id(self, cur, attendance_id) -> Optional[AttendanceRecord]:
        cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (attendance_id,))
        row = fetchone(cur)
        return record_from_row(row) if row else None

    def _get_in_bucket(
        self, cur, identity_id: str, bucket: Tuple[datetime, datetime], *, for_update: bool = False
    ) -> Optional[AttendanceRecord]:
        start, end = bucket
        cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM attendance_records
            WHERE {_IDENTITY}=%s AND check_in_time >= %s AND check_in_time < %s
            ORDER BY check_in_time DESC
            LIMIT 1
            {"FOR UPDATE" if for_update else ""}
            """,
            (str(identity_id), start, end),
        )
        row = fetchone(cur)
        return record_from_row(row) if row else None

    def get_in_bucket(self, identity_id: str, bucket: Tuple[datetime, datetime]) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._get_in_bucket(cur, identity_id, bucket)

    def create_checkin(
        self,
        *,
        identity_id: str,
        check_in_time: datetime,
        bucket: Tuple[datetime, datetime],
    ) -> WriteResult:
        with db_cursor(self._conn_factory) as (conn, cur):
            # Rows written with only user_id belong to the same bucket; the
            # row lock holds until this unit of work commits.
            existing = self._get_in_bucket(cur, identity_id, bucket, for_update=True)
            if existing is not None:
                return WriteResult(WriteOutcome.CONFLICT, existing)

            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(identity_id, check_in_time, status, legacy_entries)
                    VALUES(%s, %s, %s, '[]')
                    """,
                    (str(identity_id), check_in_time, AttendanceStatus.CHECKED_IN.value),
                )
            except Exception as e:
                if not is_duplicate_key(e):
                    raise
                conn.rollback()
                return WriteResult(WriteOutcome.CONFLICT, self._get_in_bucket(cur, identity_id, bucket))

            record = self._get_by_id(cur, cur.lastrowid)
            if record is None:
                raise StorageFailureError("Inserted attendance record could not be read back")
            return WriteResult(WriteOutcome.CREATED, record)

    def mark_checkout(self, *, record_id: str, check_out_time: datetime) -> WriteResult:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, status=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, AttendanceStatus.CHECKED_OUT.value, int(record_id)),
            )
            updated = cur.rowcount > 0
            record = self._get_by_id(cur, int(record_id))

            if updated and record is not None:
                return WriteResult(WriteOutcome.UPDATED, record)
            if record is None:
                return WriteResult(WriteOutcome.MISSING)
            return WriteResult(WriteOutcome.CONFLICT, record)

    def list_for_identity(self, identity_id: str, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        return self.query(AttendanceQuery(identity_id=identity_id, limit=limit))

    def query(self, q: AttendanceQuery) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if q.identity_id is not None:
            clauses.append(f"{_IDENTITY}=%s")
            params.append(str(q.identity_id))
        if q.status is not None:
            clauses.append("status=%s")
            params.append(q.status.value)
        if q.start_date is not None:
            clauses.append("check_in_time >= %s")
            params.append(datetime.combine(q.start_date, datetime.min.time()))
        if q.end_date is not None:
            clauses.append("check_in_time < %s")
            params.append(datetime.combine(q.end_date, datetime.min.time()) + timedelta(days=1))

        sql = f"""
            SELECT {_COLUMNS}
            FROM attendance_records
            WHERE {" AND ".join(clauses)}
            ORDER BY check_in_time IS NULL, check_in_time DESC, attendance_id DESC
        """
        if q.limit is not None:
            sql += " LIMIT %s"
            params.append(int(q.limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [record_from_row(r) for r in fetchall(cur)]
