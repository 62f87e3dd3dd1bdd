from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, money, translate_integrity_errors
from .model import Payment
from .repository import PaymentRepository

_COLUMNS = "porter_id, pay_year, pay_month, amount, is_paid, paid_at, notes, updated_by"

# Assignments run left to right, so is_paid sees the updated amount.
_SET_TOTAL = """
    INSERT INTO payments(porter_id, pay_year, pay_month, amount, is_paid, paid_at, notes, updated_by)
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s) AS new
    ON DUPLICATE KEY UPDATE
        amount=new.amount,
        is_paid=payments.amount > 0,
        paid_at=new.paid_at,
        notes=new.notes,
        updated_by=new.updated_by
"""

_ADD = """
    INSERT INTO payments(porter_id, pay_year, pay_month, amount, is_paid, paid_at, notes, updated_by)
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s) AS new
    ON DUPLICATE KEY UPDATE
        amount=payments.amount + new.amount,
        is_paid=payments.amount > 0,
        paid_at=new.paid_at,
        notes=new.notes,
        updated_by=new.updated_by
"""


def _to_payment(r: dict) -> Payment:
    return Payment(
        porter_id=int(r["porter_id"]),
        year=int(r["pay_year"]),
        month=int(r["pay_month"]),
        amount=money(r["amount"]),
        is_paid=bool(r["is_paid"]),
        paid_at=r.get("paid_at"),
        notes=r.get("notes") or "",
        updated_by=int(r["updated_by"]) if r.get("updated_by") is not None else None,
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, porter_id: int, year: int, month: int) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payments WHERE porter_id=%s AND pay_year=%s AND pay_month=%s",
                (int(porter_id), int(year), int(month)),
            )
            r = fetchone(cur)
            return _to_payment(r) if r else None

    def set_amount(
        self,
        *,
        porter_id: int,
        year: int,
        month: int,
        amount: float,
        notes: str,
        paid_at: datetime,
        updated_by: Optional[int],
    ) -> Payment:
        return self._upsert(_SET_TOTAL, porter_id, year, month, amount, notes, paid_at, updated_by)

    def add_amount(
        self,
        *,
        porter_id: int,
        year: int,
        month: int,
        increment: float,
        notes: str,
        paid_at: datetime,
        updated_by: Optional[int],
    ) -> Payment:
        return self._upsert(_ADD, porter_id, year, month, increment, notes, paid_at, updated_by)

    def _upsert(
        self,
        sql: str,
        porter_id: int,
        year: int,
        month: int,
        amount: float,
        notes: str,
        paid_at: datetime,
        updated_by: Optional[int],
    ) -> Payment:
        with translate_integrity_errors(conflict="Payment already exists", missing_reference="Porter not found"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    sql,
                    (porter_id, year, month, amount, 1 if amount > 0 else 0, paid_at, notes, updated_by),
                )
                cur.execute(
                    f"SELECT {_COLUMNS} FROM payments WHERE porter_id=%s AND pay_year=%s AND pay_month=%s",
                    (porter_id, year, month),
                )
                return _to_payment(fetchone(cur))
