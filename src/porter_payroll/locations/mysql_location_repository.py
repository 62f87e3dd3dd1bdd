from __future__ import annotations

from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_set_clause, db_cursor, fetchall, fetchone, translate_integrity_errors
from .model import Location
from .repository import LocationRepository

_COLUMNS = "location_id, code, name, is_active, created_at, updated_at"
_UPDATABLE = {"code": "code", "name": "name", "is_active": "is_active"}


def _to_location(r: dict) -> Location:
    return Location(
        location_id=int(r["location_id"]),
        code=r["code"],
        name=r["name"],
        is_active=bool(r.get("is_active", True)),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, location_id: int) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations WHERE location_id=%s", (int(location_id),))
            r = fetchone(cur)
            return _to_location(r) if r else None

    def get_by_code(self, code: str) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations WHERE code=%s", (code.strip().upper(),))
            r = fetchone(cur)
            return _to_location(r) if r else None

    def list(self, *, active: Optional[bool] = None, search: Optional[str] = None) -> Sequence[Location]:
        clauses: list[str] = []
        params: list[object] = []
        if active is not None:
            clauses.append("is_active=%s")
            params.append(1 if active else 0)
        if search:
            clauses.append("(code LIKE %s OR name LIKE %s)")
            params.extend([f"%{search}%", f"%{search}%"])
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations {where} ORDER BY code ASC", tuple(params))
            return [_to_location(r) for r in fetchall(cur)]

    def create(self, *, code: str, name: str, is_active: bool) -> int:
        with translate_integrity_errors(conflict=f"Location code {code} already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO locations(code, name, is_active) VALUES(%s,%s,%s)",
                    (code, name, 1 if is_active else 0),
                )
                return int(cur.lastrowid)

    def update(self, location_id: int, changes: dict[str, Any]) -> bool:
        set_clause, params = build_set_clause(changes, _UPDATABLE)
        if not set_clause:
            return self.get_by_id(location_id) is not None

        with translate_integrity_errors(conflict="Location code already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"UPDATE locations SET {set_clause} WHERE location_id=%s", (*params, int(location_id)))
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS found FROM locations WHERE location_id=%s", (int(location_id),))
                return fetchone(cur) is not None
