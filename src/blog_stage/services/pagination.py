"""Pagination and sort parameter normalization for list endpoints."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_ORDER = "desc"
MAX_PAGE = 1_000_000
MAX_LIMIT = 100


@dataclass(frozen=True)
class PageOptions:
    """Canonical paging window and ordering for a list query."""

    page: int
    limit: int
    skip: int
    sort_by: str
    sort_order: str


def _positive_int(value: Any, default: int, ceiling: int) -> int:
    """Coerce ``value`` to an integer in ``1..ceiling``, falling back to ``default``.

    Missing, non-numeric, non-finite, zero and negative values all use the
    default. Fractions are truncated toward zero and larger values are capped
    at ``ceiling``.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or number < 1:
        return default
    return min(int(number), ceiling)


def normalize(
    page: Any = None,
    limit: Any = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> PageOptions:
    """Turn raw query parameters into a ``PageOptions`` value.

    Never raises. ``sort_by`` and ``sort_order`` are passed through unchanged
    when present; field and direction checks belong to the query layer.
    """
    page_number = _positive_int(page, DEFAULT_PAGE, MAX_PAGE)
    page_size = _positive_int(limit, DEFAULT_LIMIT, MAX_LIMIT)
    return PageOptions(
        page=page_number,
        limit=page_size,
        skip=(page_number - 1) * page_size,
        sort_by=sort_by or DEFAULT_SORT_BY,
        sort_order=sort_order or DEFAULT_SORT_ORDER,
    )


def total_pages(total: int, limit: int) -> int:
    """Return the number of pages needed to show ``total`` rows."""
    return math.ceil(total / limit) if limit else 0
