from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.validators import PayloadChecker
from ..core.constants import MIN_NAME_LENGTH
from .repository import SEARCH_FIELDS, PorterFilter


@dataclass(frozen=True)
class NewPorter:
    uid: str
    name: str
    designation: str = ""
    account_no: str = ""
    father_name: str = ""
    is_active: bool = True


def parse_new_porter(payload: dict) -> NewPorter:
    c = PayloadChecker(payload)
    uid = c.string("uid", min_len=1, message="UID is required")
    name = c.string("name", min_len=MIN_NAME_LENGTH, message="Name must be at least 2 characters")
    designation = c.string("designation", required=False)
    account_no = c.string("accountNo", required=False)
    father_name = c.string("fatherName", required=False)
    active = c.boolean("active")
    c.raise_if_errors()
    return NewPorter(
        uid=uid,
        name=name,
        designation=designation or "",
        account_no=account_no or "",
        father_name=father_name or "",
        is_active=True if active is None else active,
    )


def parse_porter_changes(payload: dict) -> dict[str, Any]:
    c = PayloadChecker(payload)
    changes: dict[str, Any] = {}
    if c.has("uid"):
        changes["uid"] = c.string("uid", min_len=1, message="UID is required")
    if c.has("name"):
        changes["name"] = c.string("name", min_len=MIN_NAME_LENGTH, message="Name must be at least 2 characters")
    if c.has("designation"):
        changes["designation"] = c.string("designation")
    if c.has("accountNo"):
        changes["account_no"] = c.string("accountNo")
    if c.has("fatherName"):
        changes["father_name"] = c.string("fatherName")
    if c.has("active"):
        changes["is_active"] = c.boolean("active")
    c.raise_if_errors()
    return changes


def parse_porter_filter(args: Mapping[str, Any]) -> PorterFilter:
    active = args.get("active")
    field = args.get("field")
    return PorterFilter(
        active=None if active is None else active == "true",
        search=(args.get("search") or "").strip() or None,
        field=field if field in SEARCH_FIELDS else None,
    )
