from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from ..core.enums import ActivityType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Activity
from .repository import ActivityRepository


class MySQLActivityRepository(ActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        activity_type: ActivityType,
        description: str,
        user_id: Optional[int],
        metadata: dict[str, Any],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activities(activity_type, description, user_id, metadata)
                VALUES(%s,%s,%s,%s)
                """,
                (activity_type.value, description, user_id, json.dumps(metadata, default=str)),
            )
            return int(cur.lastrowid)

    def list_recent(self, *, limit: int) -> Sequence[Activity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.activity_id, a.activity_type, a.description, a.user_id, a.metadata, a.created_at,
                       u.name AS user_name, u.email AS user_email
                FROM activities a
                LEFT JOIN users u ON u.user_id = a.user_id
                ORDER BY a.created_at DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            rows = fetchall(cur)

        out: list[Activity] = []
        for r in rows:
            metadata = r.get("metadata") or {}
            if isinstance(metadata, (str, bytes)):
                metadata = json.loads(metadata)
            out.append(
                Activity(
                    activity_id=int(r["activity_id"]),
                    activity_type=ActivityType(r["activity_type"]),
                    description=r["description"],
                    user_id=r.get("user_id"),
                    created_at=r["created_at"],
                    metadata=metadata,
                    user_name=r.get("user_name"),
                    user_email=r.get("user_email"),
                )
            )
        return out
