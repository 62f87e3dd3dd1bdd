from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from ..common.pagination import Page, PageRequest
from .model import Porter

SEARCH_FIELDS = ("name", "uid", "designation")


@dataclass(frozen=True)
class PorterFilter:
    active: Optional[bool] = None
    search: Optional[str] = None
    # One of SEARCH_FIELDS; None searches all of them.
    field: Optional[str] = None


class PorterRepository(Protocol):
    def get_by_id(self, porter_id: int) -> Optional[Porter]:
        raise NotImplementedError

    def list(self, *, filters: PorterFilter, page: PageRequest) -> Page[Porter]:
        """Sorted by name."""

        raise NotImplementedError

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
        """Raises ConflictError when the uid is taken."""

        raise NotImplementedError

    def update(self, porter_id: int, changes: dict[str, Any]) -> bool:
        raise NotImplementedError
