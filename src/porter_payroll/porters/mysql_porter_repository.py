from __future__ import annotations

from typing import Any, Optional

from ..common.pagination import Page, PageRequest
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_set_clause, db_cursor, fetchall, fetchone, translate_integrity_errors
from .model import Porter
from .repository import SEARCH_FIELDS, PorterFilter, PorterRepository

_COLUMNS = "porter_id, uid, name, designation, account_no, father_name, is_active, created_at, updated_at"
_UPDATABLE = {
    "uid": "uid",
    "name": "name",
    "designation": "designation",
    "account_no": "account_no",
    "father_name": "father_name",
    "is_active": "is_active",
}


def _to_porter(r: dict) -> Porter:
    return Porter(
        porter_id=int(r["porter_id"]),
        uid=r["uid"],
        name=r["name"],
        designation=r.get("designation") or "",
        account_no=r.get("account_no") or "",
        father_name=r.get("father_name") or "",
        is_active=bool(r.get("is_active", True)),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLPorterRepository(PorterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, porter_id: int) -> Optional[Porter]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM porters WHERE porter_id=%s", (int(porter_id),))
            r = fetchone(cur)
            return _to_porter(r) if r else None

    def list(self, *, filters: PorterFilter, page: PageRequest) -> Page[Porter]:
        clauses: list[str] = []
        params: list[object] = []

        if filters.active is not None:
            clauses.append("is_active=%s")
            params.append(1 if filters.active else 0)
        if filters.search:
            fields = [filters.field] if filters.field in SEARCH_FIELDS else list(SEARCH_FIELDS)
            clauses.append("(" + " OR ".join(f"{f} LIKE %s" for f in fields) + ")")
            params.extend([f"%{filters.search}%"] * len(fields))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM porters {where}", tuple(params))
            total = int(fetchone(cur)["n"])
            cur.execute(
                f"SELECT {_COLUMNS} FROM porters {where} ORDER BY name ASC LIMIT %s OFFSET %s",
                tuple(params) + (page.limit, page.offset),
            )
            items = [_to_porter(r) for r in fetchall(cur)]
        return Page(items=items, total=total, page=page.page, limit=page.limit)

    def create(
        self,
        *,
        uid: str,
        name: str,
        designation: str,
        account_no: str,
        father_name: str,
        is_active: bool,
    ) -> int:
        with translate_integrity_errors(conflict=f"Porter UID {uid} already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO porters(uid, name, designation, account_no, father_name, is_active)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (uid, name, designation, account_no, father_name, 1 if is_active else 0),
                )
                return int(cur.lastrowid)

    def update(self, porter_id: int, changes: dict[str, Any]) -> bool:
        set_clause, params = build_set_clause(changes, _UPDATABLE)
        if not set_clause:
            return self.get_by_id(porter_id) is not None

        with translate_integrity_errors(conflict="Porter UID already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"UPDATE porters SET {set_clause} WHERE porter_id=%s", (*params, int(porter_id)))
                if cur.rowcount > 0:
                    return True
                # MySQL reports 0 affected rows when nothing changed.
                cur.execute("SELECT 1 AS found FROM porters WHERE porter_id=%s", (int(porter_id),))
                return fetchone(cur) is not None
