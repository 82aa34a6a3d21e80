from __future__ import annotations

import threading
import uuid
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..common.datetime_utils import in_bucket, isoformat
from ..core.enums import AttendanceStatus, WriteOutcome
from .legacy import document_from_record, record_from_document
from .model import AttendanceQuery, AttendanceRecord, WriteResult
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Document store kept in process memory.

    Documents are stored the way they would be persisted (either legacy or
    canonical field names) and normalized on every read. One lock guards
    every check-then-write so concurrent requests cannot both create a
    record for the same day.
    """

    def __init__(self, documents: Iterable[Mapping[str, Any]] = (), *, clock: Callable[[], datetime] = datetime.now):
        self._lock = threading.Lock()
        self._clock = clock
        self._docs: Dict[str, Dict[str, Any]] = {}
        for doc in documents:
            self.insert_document(doc)

    def insert_document(self, doc: Mapping[str, Any]) -> str:
        """Store a raw document as-is (used to load pre-existing data)."""
        doc = dict(doc)
        doc_id = str(doc.get("_id") or uuid.uuid4().hex)
        doc["_id"] = doc_id
        with self._lock:
            self._docs[doc_id] = doc
        return doc_id

    def raw_documents(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(d) for d in self._docs.values()]

    def _records(self) -> List[AttendanceRecord]:
        return [record_from_document(d) for d in self._docs.values()]

    def _find_in_bucket(self, identity_id: str, bucket: Tuple[datetime, datetime]) -> Optional[AttendanceRecord]:
        matches = [
            r for r in self._records()
            if r.identity_id == str(identity_id) and in_bucket(r.check_in_time, bucket)
        ]
        matches.sort(key=lambda r: r.check_in_time, reverse=True)
        return matches[0] if matches else None

    def get_in_bucket(self, identity_id: str, bucket: Tuple[datetime, datetime]) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._find_in_bucket(identity_id, bucket)

    def create_checkin(
        self,
        *,
        identity_id: str,
        check_in_time: datetime,
        bucket: Tuple[datetime, datetime],
    ) -> WriteResult:
        with self._lock:
            existing = self._find_in_bucket(identity_id, bucket)
            if existing is not None:
                return WriteResult(WriteOutcome.CONFLICT, existing)

            stamp = self._clock()
            record = AttendanceRecord(
                record_id=uuid.uuid4().hex,
                identity_id=str(identity_id),
                check_in_time=check_in_time,
                check_out_time=None,
                status=AttendanceStatus.CHECKED_IN,
                created_at=stamp,
                updated_at=stamp,
            )
            self._docs[record.record_id] = document_from_record(record)
            return WriteResult(WriteOutcome.CREATED, record)

    def mark_checkout(self, *, record_id: str, check_out_time: datetime) -> WriteResult:
        with self._lock:
            doc = self._docs.get(str(record_id))
            if doc is None:
                return WriteResult(WriteOutcome.MISSING)

            current = record_from_document(doc)
            if current.check_out_time is not None:
                return WriteResult(WriteOutcome.CONFLICT, current)

            # Only the mutated fields are touched; legacy fields stay as stored.
            doc["checkOutTime"] = isoformat(check_out_time)
            doc["status"] = AttendanceStatus.CHECKED_OUT.value
            doc["updatedAt"] = isoformat(self._clock())
            return WriteResult(WriteOutcome.UPDATED, record_from_document(doc))

    def list_for_identity(self, identity_id: str, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        return self.query(AttendanceQuery(identity_id=identity_id, limit=limit))

    def query(self, q: AttendanceQuery) -> Sequence[AttendanceRecord]:
        with self._lock:
            rows = self._records()

        if q.identity_id is not None:
            rows = [r for r in rows if r.identity_id == str(q.identity_id)]
        if q.status is not None:
            rows = [r for r in rows if r.status == q.status]
        if q.start_date is not None:
            start = datetime.combine(q.start_date, datetime.min.time())
            rows = [r for r in rows if r.check_in_time is not None and r.check_in_time >= start]
        if q.end_date is not None:
            end = datetime.combine(q.end_date, datetime.min.time()) + timedelta(days=1)
            rows = [r for r in rows if r.check_in_time is not None and r.check_in_time < end]

        # Records without a check-in (older generation) sort last.
        rows.sort(key=lambda r: (r.check_in_time is not None, r.check_in_time or datetime.min), reverse=True)
        if q.limit is not None:
            rows = rows[: int(q.limit)]
        return rows
