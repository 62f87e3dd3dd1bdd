from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Generic, Mapping, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def page_request(args: Mapping[str, Any], *, default_limit: int) -> PageRequest:
    """Read ``page``/``limit`` query args, falling back to sane defaults."""

    def _positive(name: str, default: int) -> int:
        try:
            value = int(args.get(name, default))
        except (TypeError, ValueError):
            return default
        return value if value > 0 else default

    return PageRequest(page=_positive("page", 1), limit=_positive("limit", default_limit))
