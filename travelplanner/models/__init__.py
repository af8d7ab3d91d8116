"""
Database models.

Importing this package registers every mapped class on ``Base.metadata``.
"""

from travelplanner.models.base import Base, BaseModel, TimestampModel
from travelplanner.models.base.enums import ActivityCategory, CitySortField, SortOrder
from travelplanner.models.location import Activity, City
from travelplanner.models.trip import Trip, TripActivity, TripStop
from travelplanner.models.user import User

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "ActivityCategory",
    "CitySortField",
    "SortOrder",
    "User",
    "City",
    "Activity",
    "Trip",
    "TripStop",
    "TripActivity",
]
