from __future__ import annotations

import logging
import math
from typing import Any, Dict, Tuple

from ..core.enums import ConflictKind
from ..core.exceptions import (
    AuthenticationFailedError,
    DomainError,
    NotFoundError,
    StateConflictError,
    StorageFailureError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def success(message: str, data: Any, status: int = 200, **extra: Any) -> Tuple[Dict[str, Any], int]:
    body: Dict[str, Any] = {"success": True, "message": message, "data": data}
    body.update(extra)
    return body, status


def failure(message: str, status: int, **extra: Any) -> Tuple[Dict[str, Any], int]:
    body: Dict[str, Any] = {"success": False, "message": message}
    body.update(extra)
    return body, status


def error_response(error: Exception, *, expose_details: bool = False) -> Tuple[Dict[str, Any], int]:
    """Map an engine error to the JSON failure body and HTTP status.

    Only AuthenticationFailed carries numbers (score, threshold) back to the
    user. Storage failures are always logged; their cause is only returned
    when expose_details is on.
    """

    if isinstance(error, AuthenticationFailedError):
        # JSON has no Infinity; an overflowing distance goes out as null.
        score = error.score if math.isfinite(error.score) else None
        return failure(str(error), 401, score=score, threshold=error.threshold)
    if isinstance(error, StateConflictError):
        status = 404 if error.kind == ConflictKind.NO_CHECK_IN_FOUND else 400
        return failure(str(error), status)
    if isinstance(error, NotFoundError):
        return failure(str(error), 404)
    if isinstance(error, ValidationError):
        return failure(str(error), 400)
    if isinstance(error, StorageFailureError):
        logger.error("storage failure: %s", error, exc_info=error)
        if expose_details:
            return failure("Server error", 500, error=str(error.cause or error))
        return failure("Server error", 500)
    if isinstance(error, DomainError):
        return failure(str(error), 400)

    logger.error("unexpected error: %s", error, exc_info=error)
    if expose_details:
        return failure("Server error", 500, error=str(error))
    return failure("Server error", 500)
