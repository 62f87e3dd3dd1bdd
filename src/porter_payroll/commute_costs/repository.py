from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from ..common.pagination import Page, PageRequest
from .model import CommuteCost


@dataclass(frozen=True)
class CommuteCostFilter:
    from_location_id: Optional[int] = None
    to_location_id: Optional[int] = None
    carrier_id: Optional[int] = None


class CommuteCostRepository(Protocol):
    def get_by_id(self, commute_cost_id: int) -> Optional[CommuteCost]:
        raise NotImplementedError

    def find_active(self, *, carrier_id: int, from_location_id: int, to_location_id: int) -> Optional[CommuteCost]:
        """Exact match on the triple among active rows; no fallback."""

        raise NotImplementedError

    def list(self, *, filters: CommuteCostFilter, page: PageRequest) -> Page[CommuteCost]:
        """Sorted by from/to location code."""

        raise NotImplementedError

    def create(
        self, *, from_location_id: int, to_location_id: int, carrier_id: int, cost: float, is_active: bool
    ) -> int:
        """Raises ConflictError on a duplicate triple, NotFoundError on unknown references."""

        raise NotImplementedError

    def update(self, commute_cost_id: int, changes: dict[str, Any]) -> bool:
        """Same errors as ``create`` when the triple changes."""

        raise NotImplementedError

    def upsert(self, *, from_location_id: int, to_location_id: int, carrier_id: int, cost: float) -> int:
        """Create the route or overwrite its cost in a single statement."""

        raise NotImplementedError

    def delete(self, commute_cost_id: int) -> bool:
        raise NotImplementedError
