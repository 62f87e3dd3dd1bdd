from __future__ import annotations

import re
from datetime import datetime

from porter_payroll.payroll.mysql_payment_repository import MySQLPaymentRepository


class RecordingCursor:
    def __init__(self, row: dict):
        self.row = row
        self.executed: list[tuple[str, tuple]] = []

    def execute(self, sql, params=()):
        self.executed.append((sql, params))

    def fetchone(self):
        return self.row

    def close(self):
        pass


class RecordingConnection:
    def __init__(self, cursor: RecordingCursor):
        self._cursor = cursor
        self.committed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        pass


class RecordingPool:
    def __init__(self, row: dict):
        self.cursor = RecordingCursor(row)
        self.conn = RecordingConnection(self.cursor)

    def connect(self):
        return self.conn


ROW = {
    "porter_id": 1,
    "pay_year": 2025,
    "pay_month": 6,
    "amount": "250.00",
    "is_paid": 1,
    "paid_at": datetime(2025, 7, 1, 10, 0),
    "notes": None,
    "updated_by": 3,
}


def _upsert_sql(pool: RecordingPool) -> str:
    return " ".join(pool.cursor.executed[0][0].split())


def test_increment_is_added_in_sql_with_row_alias():
    pool = RecordingPool(ROW)
    payment = MySQLPaymentRepository(pool).add_amount(
        porter_id=1, year=2025, month=6, increment=50, notes="", paid_at=ROW["paid_at"], updated_by=3
    )

    sql = _upsert_sql(pool)
    assert "AS new ON DUPLICATE KEY UPDATE" in sql
    assert "amount=payments.amount + new.amount" in sql
    assert not re.search(r"VALUES\(\w+\)", sql)
    assert pool.conn.committed
    assert payment.amount == 250.0
    assert payment.notes == ""


def test_total_replaces_stored_amount():
    pool = RecordingPool(ROW)
    MySQLPaymentRepository(pool).set_amount(
        porter_id=1, year=2025, month=6, amount=0, notes="reversed", paid_at=ROW["paid_at"], updated_by=3
    )

    sql, params = pool.cursor.executed[0]
    assert "amount=new.amount" in " ".join(sql.split())
    assert params[3:5] == (0, 0)
