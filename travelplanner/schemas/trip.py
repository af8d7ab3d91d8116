"""
Trip itinerary schemas.

Output schemas mirror the nested trip graph (trip -> stops -> activities)
annotated with derived metrics. Nested collections serialize under the
camel-case keys ``tripStops`` and ``tripActivities`` expected by clients.
"""

import datetime as dt
from decimal import Decimal
from typing import List, Union

from pydantic import AliasChoices, Field

from travelplanner.models.base.enums import ActivityCategory
from travelplanner.schemas.common.base import BaseCreateSchema, BaseDBSchema, BaseSchema
from travelplanner.schemas.common.pagination import PaginationMeta
from travelplanner.schemas.location import ActivityOut, CityOut, CitySummary

__all__ = [
    "TripActivityOut",
    "TripStopOut",
    "TripWithMetrics",
    "TripWithCountdown",
    "TripActivityCreate",
    "TripStopCreate",
    "TripCreate",
    "TripListResponse",
    "UpcomingTripListResponse",
    "RegionalTripListResponse",
    "SuggestionFilters",
    "SuggestedActivitiesResponse",
]


# ==================== OUTPUT ====================


class TripActivityOut(BaseDBSchema):
    """Activity scheduled on a stop."""

    trip_stop_id: str
    activity_id: str
    date: dt.date = Field(..., description="Scheduled day")
    time: Union[dt.time, None] = Field(None, description="Scheduled time of day")
    min_cost_override: Union[Decimal, None] = None
    max_cost_override: Union[Decimal, None] = None
    activity: Union[ActivityOut, None] = None


class TripStopOut(BaseDBSchema):
    """City stop with its cost totals and scheduled activities."""

    trip_id: str
    city_id: str
    start_date: dt.date
    end_date: dt.date
    order_index: int = Field(..., ge=0)
    city: Union[CityOut, None] = None
    min_cost: Decimal = Field(Decimal("0"), description="Sum of effective minimum costs")
    max_cost: Decimal = Field(Decimal("0"), description="Sum of effective maximum costs")
    trip_activities: List[TripActivityOut] = Field(
        default_factory=list,
        validation_alias=AliasChoices("trip_activities", "tripActivities"),
        serialization_alias="tripActivities",
    )


class TripWithMetrics(BaseDBSchema):
    """
    Trip with derived summary metrics.

    ``is_owner`` is null when no requester was supplied.
    """

    user_id: str
    name: str
    description: Union[str, None] = None
    start_date: dt.date
    end_date: dt.date
    cover_photo: Union[str, None] = None
    is_public: bool
    created_at: dt.datetime
    trip_stops_count: int = Field(..., ge=0)
    duration_days: int = Field(..., ge=0)
    total_activities: int = Field(..., ge=0)
    is_owner: Union[bool, None] = None
    estimated_min_cost: Decimal = Decimal("0")
    estimated_max_cost: Decimal = Decimal("0")
    trip_stops: List[TripStopOut] = Field(
        default_factory=list,
        validation_alias=AliasChoices("trip_stops", "tripStops"),
        serialization_alias="tripStops",
    )


class TripWithCountdown(TripWithMetrics):
    """Upcoming trip with whole days left before departure."""

    days_until_trip: int = Field(..., ge=0)


class TripListResponse(BaseSchema):
    trips: List[TripWithMetrics]
    pagination: PaginationMeta


class UpcomingTripListResponse(BaseSchema):
    trips: List[TripWithCountdown]
    pagination: PaginationMeta


class RegionalTripListResponse(BaseSchema):
    trips: List[TripWithMetrics]
    region: str = Field(..., description="Country the selections come from")
    pagination: PaginationMeta


class SuggestionFilters(BaseSchema):
    category: Union[ActivityCategory, None] = None
    min_cost: Union[Decimal, None] = None
    max_cost: Union[Decimal, None] = None
    limit: int


class SuggestedActivitiesResponse(BaseSchema):
    city: CitySummary
    suggestions: List[ActivityOut]
    filters: SuggestionFilters
    total: int = Field(..., ge=0)


# ==================== INPUT ====================


class TripActivityCreate(BaseCreateSchema):
    """Schedule a catalog activity on a stop."""

    activity_id: str = Field(..., min_length=1)
    date: dt.date
    time: Union[dt.time, None] = None
    min_cost_override: Union[Decimal, None] = Field(None, ge=0)
    max_cost_override: Union[Decimal, None] = Field(None, ge=0)


class TripStopCreate(BaseCreateSchema):
    """
    Add a city stop.

    ``order_index`` is assigned after the current last stop when omitted.
    """

    city_id: str = Field(..., min_length=1)
    start_date: dt.date
    end_date: dt.date
    order_index: Union[int, None] = Field(None, ge=0)
    activities: List[TripActivityCreate] = Field(default_factory=list)


class TripCreate(BaseCreateSchema):
    """Create a trip, optionally with its stops and activities."""

    name: str = Field(..., min_length=1, max_length=200)
    description: Union[str, None] = None
    start_date: dt.date
    end_date: dt.date
    cover_photo: Union[str, None] = Field(None, max_length=500)
    is_public: bool = False
    stops: List[TripStopCreate] = Field(default_factory=list)
