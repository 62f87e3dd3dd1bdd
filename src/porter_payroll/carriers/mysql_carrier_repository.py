from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import CarrierType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_set_clause, db_cursor, fetchall, fetchone, money, translate_integrity_errors
from .model import Carrier
from .repository import CarrierRepository

_COLUMNS = "carrier_id, name, capacity_kg, is_active, created_at, updated_at"
_UPDATABLE = {"name": "name", "capacity_kg": "capacity_kg", "is_active": "is_active"}


def _to_carrier(r: dict) -> Carrier:
    return Carrier(
        carrier_id=int(r["carrier_id"]),
        name=CarrierType(r["name"]),
        capacity_kg=money(r.get("capacity_kg")),
        is_active=bool(r.get("is_active", True)),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLCarrierRepository(CarrierRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, carrier_id: int) -> Optional[Carrier]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM carriers WHERE carrier_id=%s", (int(carrier_id),))
            r = fetchone(cur)
            return _to_carrier(r) if r else None

    def get_by_name(self, name: CarrierType) -> Optional[Carrier]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM carriers WHERE name=%s", (CarrierType(name).value,))
            r = fetchone(cur)
            return _to_carrier(r) if r else None

    def list(self, *, active: Optional[bool] = None) -> Sequence[Carrier]:
        where, params = "", ()
        if active is not None:
            where, params = "WHERE is_active=%s", (1 if active else 0,)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM carriers {where} ORDER BY name ASC", params)
            return [_to_carrier(r) for r in fetchall(cur)]

    def create(self, *, name: CarrierType, capacity_kg: float, is_active: bool) -> int:
        with translate_integrity_errors(conflict=f"Carrier {name.value} already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO carriers(name, capacity_kg, is_active) VALUES(%s,%s,%s)",
                    (name.value, capacity_kg, 1 if is_active else 0),
                )
                return int(cur.lastrowid)

    def update(self, carrier_id: int, changes: dict[str, Any]) -> bool:
        changes = {k: (v.value if isinstance(v, CarrierType) else v) for k, v in changes.items()}
        set_clause, params = build_set_clause(changes, _UPDATABLE)
        if not set_clause:
            return self.get_by_id(carrier_id) is not None

        with translate_integrity_errors(conflict="Carrier already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"UPDATE carriers SET {set_clause} WHERE carrier_id=%s", (*params, int(carrier_id)))
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS found FROM carriers WHERE carrier_id=%s", (int(carrier_id),))
                return fetchone(cur) is not None
