"""
Calendar schemas for month, date-range, day and year views.
"""

import datetime as dt
from typing import Dict, List, Union

from pydantic import Field

from travelplanner.schemas.common.base import BaseSchema
from travelplanner.schemas.trip import TripStopOut, TripWithMetrics

__all__ = [
    "CalendarTrip",
    "CalendarRangeTrip",
    "DateRange",
    "MonthCalendarResponse",
    "DateRangeCalendarResponse",
    "DayCalendarResponse",
    "MonthlyOverview",
    "YearlySummary",
    "YearOverviewResponse",
]


class CalendarTrip(BaseSchema):
    """
    Trip summary placed on a calendar.

    ``duration_days`` counts calendar days inclusively.
    """

    id: str
    name: str
    description: Union[str, None] = None
    start_date: dt.date
    end_date: dt.date
    cover_photo: Union[str, None] = None
    is_public: bool
    duration_days: int = Field(..., ge=1)
    destinations: str = Field(..., description="Stop city names in visiting order")


class CalendarRangeTrip(TripWithMetrics):
    """Trip with metrics plus its destinations and inclusive calendar day count."""

    destinations: str
    calendar_days: int = Field(..., ge=1)


class DateRange(BaseSchema):
    start_date: dt.date
    end_date: dt.date


class MonthCalendarResponse(BaseSchema):
    trips: List[CalendarTrip]
    days: Dict[dt.date, List[str]] = Field(
        default_factory=dict,
        description="Trip ids touching each day of the month",
    )
    month: int = Field(..., ge=1, le=12)
    year: int
    total: int = Field(..., ge=0)


class DateRangeCalendarResponse(BaseSchema):
    trips: List[CalendarRangeTrip]
    date_range: DateRange
    total: int = Field(..., ge=0)


class DayCalendarResponse(BaseSchema):
    date: dt.date
    trips: List[CalendarTrip]
    stops: List[TripStopOut] = Field(
        default_factory=list,
        description="Stops of the listed trips that touch the day",
    )
    total: int = Field(..., ge=0)


class MonthlyOverview(BaseSchema):
    month: int = Field(..., ge=1, le=12)
    month_name: str
    trip_count: int = Field(..., ge=0)
    trips: List[CalendarTrip] = Field(default_factory=list)


class YearlySummary(BaseSchema):
    total_trips: int = Field(..., ge=0)
    total_travel_days: int = Field(..., ge=0)
    busiest_month: MonthlyOverview


class YearOverviewResponse(BaseSchema):
    year: int
    monthly_overview: List[MonthlyOverview]
    yearly_summary: YearlySummary
