# --- File: travelplanner/schemas/common/pagination.py ---
"""
Pagination schemas for page-based responses.
"""

from __future__ import annotations

from pydantic import Field, computed_field

from travelplanner.schemas.common.base import BaseSchema

__all__ = [
    "PaginationParams",
    "PaginationMeta",
]


class PaginationParams(BaseSchema):
    """Normalized pagination parameters."""

    page: int = Field(
        default=1,
        ge=1,
        description="Page number (1-indexed)",
    )
    limit: int = Field(
        default=10,
        ge=1,
        description="Items per page",
    )

    @computed_field  # type: ignore[misc]
    @property
    def offset(self) -> int:
        """Calculate offset for database queries."""
        return (self.page - 1) * self.limit


class PaginationMeta(BaseSchema):
    """Pagination metadata."""

    page: int = Field(..., ge=1, description="Current page number")
    limit: int = Field(..., ge=1, description="Items per page")
    total: int = Field(..., ge=0, description="Total number of items")
    total_pages: int = Field(..., ge=0, description="Total number of pages")
    has_next: bool = Field(..., description="Has next page")
    has_previous: bool = Field(..., description="Has previous page")
