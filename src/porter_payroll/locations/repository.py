from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import Location


class LocationRepository(Protocol):
    def get_by_id(self, location_id: int) -> Optional[Location]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Location]:
        raise NotImplementedError

    def list(self, *, active: Optional[bool] = None, search: Optional[str] = None) -> Sequence[Location]:
        """Sorted by code. ``search`` matches code or name."""

        raise NotImplementedError

    def create(self, *, code: str, name: str, is_active: bool) -> int:
        raise NotImplementedError

    def update(self, location_id: int, changes: dict[str, Any]) -> bool:
        raise NotImplementedError
