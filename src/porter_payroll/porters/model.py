from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Porter:
    """Domain entity: a porter whose trips are paid per route.

    Porters are only ever deactivated; attendance rows keep pointing at them.
    """

    porter_id: int
    uid: str
    name: str
    designation: str = ""
    account_no: str = ""
    father_name: str = ""
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def porter_to_dict(p: Porter) -> dict:
    return {
        "id": p.porter_id,
        "uid": p.uid,
        "name": p.name,
        "designation": p.designation,
        "accountNo": p.account_no,
        "fatherName": p.father_name,
        "active": p.is_active,
        "createdAt": p.created_at.isoformat() if p.created_at else None,
        "updatedAt": p.updated_at.isoformat() if p.updated_at else None,
    }
