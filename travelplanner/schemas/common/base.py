# --- File: travelplanner/schemas/common/base.py ---
"""
Base schema classes with common fields and configurations.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BaseSchema",
    "TimestampMixin",
    "UUIDMixin",
    "BaseDBSchema",
    "BaseCreateSchema",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    All application-facing schemas inherit from this to ensure
    consistent behaviour (ORM loading, alias population, whitespace handling).
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=False,
        arbitrary_types_allowed=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields."""

    created_at: datetime = Field(..., description="Creation timestamp")


class UUIDMixin(BaseModel):
    """Mixin for UUID primary key."""

    id: str = Field(..., description="Unique identifier")


class BaseDBSchema(BaseSchema, UUIDMixin):
    """Base schema for database entities with ID."""
    pass


class BaseCreateSchema(BaseSchema):
    """Base schema for create operations."""

    model_config = ConfigDict(extra="forbid")
