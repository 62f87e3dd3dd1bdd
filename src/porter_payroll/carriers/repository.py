from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..core.enums import CarrierType
from .model import Carrier


class CarrierRepository(Protocol):
    def get_by_id(self, carrier_id: int) -> Optional[Carrier]:
        raise NotImplementedError

    def get_by_name(self, name: CarrierType) -> Optional[Carrier]:
        raise NotImplementedError

    def list(self, *, active: Optional[bool] = None) -> Sequence[Carrier]:
        """Sorted by name."""

        raise NotImplementedError

    def create(self, *, name: CarrierType, capacity_kg: float, is_active: bool) -> int:
        raise NotImplementedError

    def update(self, carrier_id: int, changes: dict[str, Any]) -> bool:
        raise NotImplementedError
