"""
Page arithmetic for the user listing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Lenient integer parse: missing, non-numeric or < 1 falls back to ``default``."""
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value >= 1 else default


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)

    def has_previous(self) -> bool:
        return self.page > 1

    def has_next(self, total: int) -> bool:
        return self.page < self.total_pages(total)


def page_window(
    page: Optional[str],
    limit: Optional[str],
    default_limit: int = 10,
    max_limit: int = 100,
) -> PageWindow:
    """Build a ``PageWindow`` from raw query-string values."""
    size = min(parse_positive_int(limit, default_limit), max_limit)
    return PageWindow(page=parse_positive_int(page, 1), limit=size)
