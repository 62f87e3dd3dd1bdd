from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, NotFoundError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def translate_integrity_errors(*, conflict: str, missing_reference: str = "Referenced record not found"):
    """Map MySQL constraint violations onto domain errors."""
    try:
        yield
    except mysql.connector.IntegrityError as exc:
        if exc.errno == errorcode.ER_DUP_ENTRY:
            raise ConflictError(conflict) from exc
        if exc.errno in (errorcode.ER_NO_REFERENCED_ROW, errorcode.ER_NO_REFERENCED_ROW_2):
            raise NotFoundError(missing_reference) from exc
        raise


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def build_set_clause(changes: Dict[str, Any], columns: Dict[str, str]) -> tuple[str, list]:
    """Turn a {field: value} dict into ``col=%s, ...`` plus params.

    ``columns`` maps allowed field names to column names, so callers can't
    inject arbitrary identifiers.
    """
    parts: list[str] = []
    params: list[Any] = []
    for field, value in changes.items():
        column = columns.get(field)
        if column is None:
            continue
        parts.append(f"{column}=%s")
        params.append(value)
    return ", ".join(parts), params


def money(value: Any) -> float:
    return float(value or 0)
