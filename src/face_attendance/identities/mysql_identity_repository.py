from __future__ import annotations

import json
from typing import Optional

from ..core.enums import Pose
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EnrolledDescriptor, Identity
from .repository import IdentityRepository


class MySQLIdentityRepository(IdentityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, identity_id: str) -> Optional[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT identity_id, full_name, is_active
                FROM identities
                WHERE identity_id=%s
                """,
                (str(identity_id),),
            )
            row = fetchone(cur)
            if not row:
                return None

            cur.execute(
                """
                SELECT pose, descriptor
                FROM face_descriptors
                WHERE identity_id=%s
                ORDER BY FIELD(pose, 'front', 'left', 'right')
                """,
                (str(identity_id),),
            )
            descriptors = tuple(
                EnrolledDescriptor(pose=Pose(r["pose"]), vector=json.loads(r["descriptor"]))
                for r in fetchall(cur)
            )

            return Identity(
                identity_id=str(row["identity_id"]),
                full_name=row.get("full_name") or "",
                descriptors=descriptors,
                is_active=bool(row.get("is_active", True)),
            )
