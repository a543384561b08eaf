"""Pagination - page/limit resolution and page arithmetic for list requests.

Invariants:
    - resolve_page() >= 1 for any input
    - 1 <= resolve_limit() <= MAX_PAGE_SIZE for any input
    - total_pages(0, n) == 0
"""

import math
from typing import Any

from transactions_api.core.domain_types import (
    DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE,
)
from transactions_api.core.validate_transaction import parse_int


def resolve_page(raw: Any) -> int:
    """Requested page, defaulting to 1 and floored at 1."""
    page = parse_int(raw) if raw is not None else None
    if page is None:
        return DEFAULT_PAGE
    return max(1, page)


def resolve_limit(raw: Any) -> int:
    """Requested page size, defaulting to 10 and clamped to [1, 100]."""
    limit = parse_int(raw) if raw is not None else None
    if limit is None:
        return DEFAULT_PAGE_SIZE
    return min(MAX_PAGE_SIZE, max(1, limit))


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit


def total_pages(total: int, per_page: int) -> int:
    return math.ceil(total / per_page)
