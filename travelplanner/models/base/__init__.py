"""
Base models package.

Provides the declarative base, mixins and enums for all database models.
"""

from travelplanner.models.base.base_model import (
    Base,
    BaseModel,
    TimestampModel,
)

from travelplanner.models.base.mixins import (
    TimestampMixin,
    UUIDMixin,
    utc_now,
)

from travelplanner.models.base.enums import (
    ActivityCategory,
    CitySortField,
    SortOrder,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "TimestampMixin",
    "UUIDMixin",
    "utc_now",
    "ActivityCategory",
    "CitySortField",
    "SortOrder",
]
