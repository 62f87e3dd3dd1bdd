from __future__ import annotations

from typing import Any, Optional

from ..common.pagination import Page, PageRequest
from ..core.refs import CarrierRef, LocationRef
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_set_clause, db_cursor, fetchall, fetchone, money, translate_integrity_errors
from .model import CommuteCost
from .repository import CommuteCostFilter, CommuteCostRepository

_DUPLICATE = "Commute cost already exists for this route and carrier"
_MISSING_REF = "Location or carrier not found"

_SELECT = """
    SELECT cc.commute_cost_id, cc.cost, cc.is_active, cc.created_at, cc.updated_at,
           fl.location_id AS from_id, fl.code AS from_code, fl.name AS from_name,
           tl.location_id AS to_id, tl.code AS to_code, tl.name AS to_name,
           c.carrier_id, c.name AS carrier_name, c.capacity_kg
    FROM commute_costs cc
    JOIN locations fl ON fl.location_id = cc.from_location_id
    JOIN locations tl ON tl.location_id = cc.to_location_id
    JOIN carriers c ON c.carrier_id = cc.carrier_id
"""

_UPDATABLE = {
    "from_location_id": "from_location_id",
    "to_location_id": "to_location_id",
    "carrier_id": "carrier_id",
    "cost": "cost",
    "is_active": "is_active",
}


def _to_commute_cost(r: dict) -> CommuteCost:
    return CommuteCost(
        commute_cost_id=int(r["commute_cost_id"]),
        from_location=LocationRef(int(r["from_id"]), r["from_code"], r["from_name"]),
        to_location=LocationRef(int(r["to_id"]), r["to_code"], r["to_name"]),
        carrier=CarrierRef(int(r["carrier_id"]), r["carrier_name"], money(r.get("capacity_kg"))),
        cost=money(r["cost"]),
        is_active=bool(r.get("is_active", True)),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLCommuteCostRepository(CommuteCostRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, commute_cost_id: int) -> Optional[CommuteCost]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE cc.commute_cost_id=%s", (int(commute_cost_id),))
            r = fetchone(cur)
            return _to_commute_cost(r) if r else None

    def find_active(self, *, carrier_id: int, from_location_id: int, to_location_id: int) -> Optional[CommuteCost]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + " WHERE cc.carrier_id=%s AND cc.from_location_id=%s AND cc.to_location_id=%s AND cc.is_active=1",
                (int(carrier_id), int(from_location_id), int(to_location_id)),
            )
            r = fetchone(cur)
            return _to_commute_cost(r) if r else None

    def list(self, *, filters: CommuteCostFilter, page: PageRequest) -> Page[CommuteCost]:
        clauses: list[str] = []
        params: list[object] = []
        if filters.from_location_id:
            clauses.append("cc.from_location_id=%s")
            params.append(filters.from_location_id)
        if filters.to_location_id:
            clauses.append("cc.to_location_id=%s")
            params.append(filters.to_location_id)
        if filters.carrier_id:
            clauses.append("cc.carrier_id=%s")
            params.append(filters.carrier_id)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM commute_costs cc{where}", tuple(params))
            total = int(fetchone(cur)["n"])
            cur.execute(
                _SELECT + where + " ORDER BY fl.code ASC, tl.code ASC, c.name ASC LIMIT %s OFFSET %s",
                tuple(params) + (page.limit, page.offset),
            )
            items = [_to_commute_cost(r) for r in fetchall(cur)]
        return Page(items=items, total=total, page=page.page, limit=page.limit)

    def create(
        self, *, from_location_id: int, to_location_id: int, carrier_id: int, cost: float, is_active: bool
    ) -> int:
        with translate_integrity_errors(conflict=_DUPLICATE, missing_reference=_MISSING_REF):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO commute_costs(from_location_id, to_location_id, carrier_id, cost, is_active)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (from_location_id, to_location_id, carrier_id, cost, 1 if is_active else 0),
                )
                return int(cur.lastrowid)

    def update(self, commute_cost_id: int, changes: dict[str, Any]) -> bool:
        set_clause, params = build_set_clause(changes, _UPDATABLE)
        if not set_clause:
            return self.get_by_id(commute_cost_id) is not None

        with translate_integrity_errors(conflict=_DUPLICATE, missing_reference=_MISSING_REF):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE commute_costs SET {set_clause} WHERE commute_cost_id=%s",
                    (*params, int(commute_cost_id)),
                )
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS found FROM commute_costs WHERE commute_cost_id=%s", (int(commute_cost_id),))
                return fetchone(cur) is not None

    def upsert(self, *, from_location_id: int, to_location_id: int, carrier_id: int, cost: float) -> int:
        with translate_integrity_errors(conflict=_DUPLICATE, missing_reference=_MISSING_REF):
            with db_cursor(self._conn_factory) as (_, cur):
                # LAST_INSERT_ID(expr) makes lastrowid report the existing row on update.
                cur.execute(
                    """
                    INSERT INTO commute_costs(from_location_id, to_location_id, carrier_id, cost)
                    VALUES(%s,%s,%s,%s) AS new
                    ON DUPLICATE KEY UPDATE
                        cost=new.cost,
                        commute_cost_id=LAST_INSERT_ID(commute_cost_id)
                    """,
                    (from_location_id, to_location_id, carrier_id, cost),
                )
                return int(cur.lastrowid)

    def delete(self, commute_cost_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM commute_costs WHERE commute_cost_id=%s", (int(commute_cost_id),))
            return cur.rowcount > 0
