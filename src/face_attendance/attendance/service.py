from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterator, Optional, Sequence

import numpy as np

from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..identities.model import Identity
from ..identities.repository import IdentityRepository
from ..matching.matcher import FaceMatcher
from ..matching.model import Accept
from .ledger import AttendanceLedger
from .model import AttendanceQuery, AttendanceRecord, Session

logger = logging.getLogger(__name__)


class AttendanceService:
    """Face-verified check-in/check-out.

    Loads the identity's enrolled descriptors, runs the matcher and, only on
    accept, advances the ledger. The descriptor must already be parsed at the
    request boundary (see common.validators.parse_descriptor).
    """

    def __init__(
        self,
        identities: IdentityRepository,
        ledger: AttendanceLedger,
        matcher: FaceMatcher,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._identities = identities
        self._ledger = ledger
        self._matcher = matcher
        self._clock = clock or now_local

    @property
    def threshold(self) -> float:
        return self._matcher.threshold

    def _get_identity(self, identity_id: str) -> Identity:
        identity = self._identities.get_by_id(str(identity_id))
        if identity is None or not identity.is_active:
            raise NotFoundError("User not found")
        return identity

    def verify(self, identity_id: str, descriptor: np.ndarray) -> Accept:
        identity = self._get_identity(identity_id)
        result = self._matcher.match(descriptor, identity.descriptors)
        if isinstance(result, Accept):
            logger.info("face verified: identity=%s score=%.4f", identity_id, result.score)
            return result

        # No descriptor values in logs.
        logger.warning(
            "face rejected: identity=%s kind=%s score=%s threshold=%s",
            identity_id, result.kind.value, result.score, result.threshold,
        )
        raise result.to_error()

    def check_in(self, identity_id: str, descriptor: np.ndarray, *, now: Optional[datetime] = None) -> AttendanceRecord:
        self.verify(identity_id, descriptor)
        return self._ledger.check_in(str(identity_id), now or self._clock())

    def check_out(self, identity_id: str, descriptor: np.ndarray, *, now: Optional[datetime] = None) -> AttendanceRecord:
        self.verify(identity_id, descriptor)
        return self._ledger.check_out(str(identity_id), now or self._clock())

    def get_today_record(self, identity_id: str, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        return self._ledger.today_record(str(identity_id), now or self._clock())

    def get_history(self, identity_id: str, *, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        return self._ledger.history(str(identity_id), limit=limit)

    def get_sessions(self, identity_id: str) -> Iterator[Session]:
        return self._ledger.sessions(str(identity_id))

    def admin_list(
        self,
        *,
        identity_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        return self._ledger.admin_list(
            AttendanceQuery(
                identity_id=str(identity_id) if identity_id is not None else None,
                start_date=start_date,
                end_date=end_date,
                status=status,
                limit=limit,
            )
        )
