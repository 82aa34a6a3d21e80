from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from ..core.constants import DEFAULT_MATCH_THRESHOLD
from ..identities.model import EnrolledDescriptor
from .model import Accept, MatchResult, Reject, RejectKind


class FaceMatcher:
    """Nearest-candidate matcher over enrolled face descriptors.

    The score is the smallest Euclidean distance between the live descriptor
    and any enrolled descriptor of the same length. A score equal to the
    threshold is still accepted; lower threshold = stricter.

    Pure computation: no I/O and no shared state, so no locking either.
    """

    def __init__(self, threshold: float = DEFAULT_MATCH_THRESHOLD):
        self._threshold = float(threshold)

    @property
    def threshold(self) -> float:
        return self._threshold

    def match(self, live: Any, enrolled: Sequence[EnrolledDescriptor]) -> MatchResult:
        live = _as_vector(live)
        if live is None:
            return Reject(kind=RejectKind.INPUT_INVALID, threshold=self._threshold)

        if not enrolled:
            return Reject(kind=RejectKind.ENROLLMENT_MISSING, threshold=self._threshold)

        # Stored vectors holding NaN or inf cannot be scored against.
        candidates = [d.vector for d in enrolled if len(d) == live.shape[0] and np.all(np.isfinite(d.vector))]
        if not candidates:
            return Reject(kind=RejectKind.FORMAT_MISMATCH, threshold=self._threshold)

        distances = np.linalg.norm(np.vstack(candidates) - live, axis=1)
        score = float(distances.min())

        if score <= self._threshold:
            return Accept(score=score)
        return Reject(kind=RejectKind.AUTHENTICATION_FAILED, threshold=self._threshold, score=score)


def _as_vector(value: Any):
    if isinstance(value, (list, tuple)):
        if any(isinstance(v, bool) for v in value):
            return None
        try:
            value = np.asarray(value, dtype=np.float64)
        except (TypeError, ValueError, OverflowError):
            return None
    if not isinstance(value, np.ndarray) or value.ndim != 1 or value.size == 0:
        return None
    if not np.issubdtype(value.dtype, np.number) or not np.all(np.isfinite(value)):
        return None
    return value
