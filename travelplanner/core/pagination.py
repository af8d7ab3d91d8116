# travelplanner/core/pagination.py
from __future__ import annotations

"""
Core pagination helpers.

This module provides:
- `normalize_pagination` to clean up raw page/limit inputs using defaults
  and clamping.
- `build_pagination_meta` to describe a page of results.

Pagination values are display controls, so malformed input is clamped to
defaults instead of being rejected.
"""

from typing import Any, Optional

from travelplanner.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE, MAX_PAGE_SIZE
from travelplanner.schemas.common.pagination import PaginationParams, PaginationMeta


def _coerce_int(value: Any) -> Optional[int]:
    """Best-effort conversion of a query value to int; None when not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def normalize_pagination(
    page: Any,
    limit: Any,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE,
) -> PaginationParams:
    """
    Normalize raw page & limit inputs into a PaginationParams object
    with sane defaults and a clamped max page size.

    Rules:
        - page non-numeric, None or < 1 -> DEFAULT_PAGE
        - page > MAX_PAGE -> MAX_PAGE
        - limit non-numeric, None or < 1 -> default_limit
        - limit > max_limit -> max_limit
    """
    page_value = _coerce_int(page)
    limit_value = _coerce_int(limit)

    if page_value is None or page_value < 1:
        page_value = DEFAULT_PAGE
    elif page_value > MAX_PAGE:
        page_value = MAX_PAGE

    if limit_value is None or limit_value < 1:
        limit_value = default_limit

    if limit_value > max_limit:
        limit_value = max_limit

    return PaginationParams(page=page_value, limit=limit_value)


def build_pagination_meta(params: PaginationParams, total: int) -> PaginationMeta:
    """Build pagination metadata for a page of results."""
    total_pages = (total + params.limit - 1) // params.limit if total > 0 else 0
    return PaginationMeta(
        page=params.page,
        limit=params.limit,
        total=total,
        total_pages=total_pages,
        has_next=params.page < total_pages,
        has_previous=params.page > 1,
    )
