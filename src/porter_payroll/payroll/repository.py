from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Payment


class PaymentRepository(Protocol):
    def get(self, porter_id: int, year: int, month: int) -> Optional[Payment]:
        raise NotImplementedError

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
        """Upsert with ``amount`` as the new cumulative total."""

        raise NotImplementedError

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
        """Upsert adding ``increment`` to the stored total in one statement."""

        raise NotImplementedError
