from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..common.pagination import Page, PageRequest
from ..core.refs import CarrierRef, LocationRef, PorterRef, UserRef
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_set_clause, db_cursor, fetchall, fetchone, money, translate_integrity_errors
from .model import AttendanceEntry, DaySummary
from .repository import AttendanceFilter, AttendanceRepository, PeriodStats

_MISSING_REF = "Porter, carrier or location not found"

# Single read-model assembly for attendance-with-references.
_SELECT = """
    SELECT a.attendance_id, a.work_date, a.task, a.commute_cost_id, a.computed_cost,
           a.created_at, a.updated_at,
           p.porter_id, p.uid AS porter_uid, p.name AS porter_name, p.designation AS porter_designation,
           c.carrier_id, c.name AS carrier_name, c.capacity_kg,
           fl.location_id AS from_id, fl.code AS from_code, fl.name AS from_name,
           tl.location_id AS to_id, tl.code AS to_code, tl.name AS to_name,
           u.user_id AS creator_id, u.name AS creator_name, u.email AS creator_email
    FROM attendance_entries a
    JOIN porters p ON p.porter_id = a.porter_id
    JOIN carriers c ON c.carrier_id = a.carrier_id
    JOIN locations fl ON fl.location_id = a.location_from_id
    JOIN locations tl ON tl.location_id = a.location_to_id
    LEFT JOIN users u ON u.user_id = a.created_by
"""

_UPDATABLE = {
    "work_date": "work_date",
    "porter_id": "porter_id",
    "carrier_id": "carrier_id",
    "location_from_id": "location_from_id",
    "location_to_id": "location_to_id",
    "task": "task",
    "commute_cost_id": "commute_cost_id",
    "computed_cost": "computed_cost",
}


def _to_entry(r: dict) -> AttendanceEntry:
    creator = None
    if r.get("creator_id") is not None:
        creator = UserRef(int(r["creator_id"]), r["creator_name"], r["creator_email"])
    return AttendanceEntry(
        attendance_id=int(r["attendance_id"]),
        work_date=r["work_date"],
        porter=PorterRef(int(r["porter_id"]), r["porter_uid"], r["porter_name"], r.get("porter_designation") or ""),
        carrier=CarrierRef(int(r["carrier_id"]), r["carrier_name"], money(r.get("capacity_kg"))),
        location_from=LocationRef(int(r["from_id"]), r["from_code"], r["from_name"]),
        location_to=LocationRef(int(r["to_id"]), r["to_code"], r["to_name"]),
        computed_cost=money(r["computed_cost"]),
        task=r.get("task") or "",
        commute_cost_id=int(r["commute_cost_id"]) if r.get("commute_cost_id") is not None else None,
        created_by=creator,
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _where(filters: AttendanceFilter) -> tuple[str, list]:
    clauses: list[str] = []
    params: list[object] = []
    if filters.start is not None:
        clauses.append("a.work_date >= %s")
        params.append(filters.start)
    if filters.end is not None:
        clauses.append("a.work_date <= %s")
        params.append(filters.end)
    if filters.porter_id:
        clauses.append("a.porter_id = %s")
        params.append(filters.porter_id)
    return (f" WHERE {' AND '.join(clauses)}" if clauses else ""), params


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def list(self, *, filters: AttendanceFilter, page: PageRequest) -> Page[AttendanceEntry]:
        where, params = _where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM attendance_entries a{where}", tuple(params))
            total = int(fetchone(cur)["n"])
            cur.execute(
                _SELECT + where + " ORDER BY a.work_date DESC, a.attendance_id DESC LIMIT %s OFFSET %s",
                tuple(params) + (page.limit, page.offset),
            )
            items = [_to_entry(r) for r in fetchall(cur)]
        return Page(items=items, total=total, page=page.page, limit=page.limit)

    def list_between(self, start: date, end: date, *, porter_id: Optional[int] = None) -> Sequence[AttendanceEntry]:
        where, params = _where(AttendanceFilter(start=start, end=end, porter_id=porter_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where + " ORDER BY a.work_date ASC, a.attendance_id ASC", tuple(params))
            return [_to_entry(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        work_date: date,
        porter_id: int,
        carrier_id: int,
        location_from_id: int,
        location_to_id: int,
        task: str,
        commute_cost_id: int,
        computed_cost: float,
        created_by: Optional[int],
    ) -> int:
        with translate_integrity_errors(conflict="Duplicate attendance record", missing_reference=_MISSING_REF):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_entries(
                        work_date, porter_id, carrier_id, location_from_id, location_to_id,
                        task, commute_cost_id, computed_cost, created_by
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        work_date,
                        porter_id,
                        carrier_id,
                        location_from_id,
                        location_to_id,
                        task,
                        commute_cost_id,
                        computed_cost,
                        created_by,
                    ),
                )
                return int(cur.lastrowid)

    def update(self, attendance_id: int, changes: dict[str, Any]) -> bool:
        set_clause, params = build_set_clause(changes, _UPDATABLE)
        if not set_clause:
            return self.get_by_id(attendance_id) is not None

        with translate_integrity_errors(conflict="Duplicate attendance record", missing_reference=_MISSING_REF):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE attendance_entries SET {set_clause} WHERE attendance_id=%s",
                    (*params, int(attendance_id)),
                )
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS found FROM attendance_entries WHERE attendance_id=%s", (int(attendance_id),))
                return fetchone(cur) is not None

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_entries WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0

    def daily_summary(self, start: date, end: date) -> Sequence[DaySummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT work_date, COUNT(*) AS n, COUNT(DISTINCT porter_id) AS porters,
                       COALESCE(SUM(computed_cost), 0) AS total
                FROM attendance_entries
                WHERE work_date BETWEEN %s AND %s
                GROUP BY work_date
                ORDER BY work_date ASC
                """,
                (start, end),
            )
            return [
                DaySummary(
                    day=r["work_date"],
                    count=int(r["n"]),
                    porter_count=int(r["porters"]),
                    total_cost=money(r["total"]),
                )
                for r in fetchall(cur)
            ]

    def period_stats(self, start: date, end: date) -> PeriodStats:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS n, COALESCE(SUM(computed_cost), 0) AS total,
                       COUNT(DISTINCT porter_id) AS porters
                FROM attendance_entries
                WHERE work_date BETWEEN %s AND %s
                """,
                (start, end),
            )
            r = fetchone(cur) or {}
        return PeriodStats(
            entry_count=int(r.get("n") or 0),
            total_cost=money(r.get("total")),
            porter_count=int(r.get("porters") or 0),
        )

    def distinct_porter_count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(DISTINCT porter_id) AS n FROM attendance_entries")
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def recent(self, limit: int) -> Sequence[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY a.created_at DESC, a.attendance_id DESC LIMIT %s", (int(limit),))
            return [_to_entry(r) for r in fetchall(cur)]
