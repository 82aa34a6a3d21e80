from __future__ import annotations

import threading
from typing import Any, Dict, Iterable, Mapping, Optional

from .legacy import descriptors_from_face_data
from .model import EnrolledDescriptor, Identity
from .repository import IdentityRepository


class InMemoryIdentityRepository(IdentityRepository):
    """Descriptor store kept in process memory (tests, demos)."""

    def __init__(self, identities: Iterable[Identity] = ()):
        self._lock = threading.Lock()
        self._by_id: Dict[str, Identity] = {str(i.identity_id): i for i in identities}

    def get_by_id(self, identity_id: str) -> Optional[Identity]:
        with self._lock:
            return self._by_id.get(str(identity_id))

    def put(self, identity: Identity) -> None:
        with self._lock:
            self._by_id[str(identity.identity_id)] = identity

    def put_user_document(self, doc: Mapping[str, Any]) -> Identity:
        """Load a legacy user document ({_id, name, faceData}) into the store."""
        identity = Identity(
            identity_id=str(doc.get("_id") or doc.get("id")),
            full_name=str(doc.get("name") or ""),
            descriptors=tuple(descriptors_from_face_data(doc.get("faceData"))),
            is_active=doc.get("status", "active") == "active",
        )
        self.put(identity)
        return identity

    def enroll(self, identity_id: str, *descriptors: EnrolledDescriptor, full_name: str = "") -> Identity:
        identity = Identity(identity_id=str(identity_id), full_name=full_name, descriptors=tuple(descriptors))
        self.put(identity)
        return identity
