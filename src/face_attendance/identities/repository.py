from __future__ import annotations

from typing import Optional, Protocol

from .model import Identity


class IdentityRepository(Protocol):
    """Read interface of the descriptor store.

    The attendance engine never writes enrollments; that belongs to the
    registration flow.
    """

    def get_by_id(self, identity_id: str) -> Optional[Identity]:
        raise NotImplementedError
