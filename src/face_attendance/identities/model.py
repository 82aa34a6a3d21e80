from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from ..core.enums import Pose


@dataclass(frozen=True, eq=False)
class EnrolledDescriptor:
    """An enrolled face descriptor for one pose.

    The vector is stored read-only; re-enrollment replaces descriptors wholesale.
    """

    pose: Pose
    vector: np.ndarray = field(repr=False)

    def __post_init__(self):
        vector = np.array(self.vector, dtype=np.float64)
        vector.setflags(write=False)
        object.__setattr__(self, "vector", vector)

    def __len__(self) -> int:
        return int(self.vector.shape[0]) if self.vector.ndim == 1 else 0


@dataclass(frozen=True)
class Identity:
    """Domain entity: a person who can check in with their face."""

    identity_id: str
    full_name: str = ""
    descriptors: Tuple[EnrolledDescriptor, ...] = ()
    is_active: bool = True

    @property
    def is_enrolled(self) -> bool:
        return bool(self.descriptors)
