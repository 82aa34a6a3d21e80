from __future__ import annotations

import math
from numbers import Real
from typing import Any, Optional

import numpy as np

from ..core.exceptions import InputInvalidError, ValidationError


def parse_descriptor(value: Any) -> np.ndarray:
    """Parse a JSON face descriptor into a read-only float vector.

    Runs once at the request boundary so the matcher only ever sees a typed,
    non-empty, finite 1-D vector.
    """

    if value is None:
        raise InputInvalidError("Face descriptor is required")
    if not isinstance(value, (list, tuple)) or not value:
        raise InputInvalidError("Face descriptor must be a non-empty array of numbers")

    for item in value:
        # bool is a subclass of int; a list of flags is not a descriptor.
        if isinstance(item, bool) or not isinstance(item, Real):
            raise InputInvalidError("Face descriptor must be a non-empty array of numbers")
        try:
            finite = math.isfinite(item)
        except OverflowError:
            finite = False
        if not finite:
            raise InputInvalidError("Face descriptor must be a non-empty array of numbers")

    vector = np.asarray(value, dtype=np.float64)
    vector.setflags(write=False)
    return vector


def parse_optional_int(value: Optional[str], field_name: str, *, positive: bool = False) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field_name} must be an integer") from e
    if positive and number < 1:
        raise ValidationError(f"{field_name} must be a positive integer")
    return number
