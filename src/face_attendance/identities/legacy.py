from __future__ import annotations

from typing import Any, List, Mapping, Optional

from ..core.constants import MAX_ENROLLED_DESCRIPTORS
from ..core.enums import Pose
from .model import EnrolledDescriptor

# Historical user documents kept descriptors under faceData.<pose>Descriptor.
_FACE_DATA_KEYS = {
    Pose.FRONT: "frontDescriptor",
    Pose.LEFT: "leftDescriptor",
    Pose.RIGHT: "rightDescriptor",
}


def descriptors_from_face_data(face_data: Optional[Mapping[str, Any]]) -> List[EnrolledDescriptor]:
    """Convert a faceData mapping into enrolled descriptors, skipping empty poses."""
    if not face_data:
        return []

    out: List[EnrolledDescriptor] = []
    for pose, key in _FACE_DATA_KEYS.items():
        values = face_data.get(key)
        if values:
            out.append(EnrolledDescriptor(pose=pose, vector=list(values)))
    return out[:MAX_ENROLLED_DESCRIPTORS]
