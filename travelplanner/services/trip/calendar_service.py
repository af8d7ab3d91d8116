"""
Calendar aggregation for trips.

Built on one overlap rule: an interval [s, e] touches day D iff s <= D <= e
and intersects [a, b] iff s <= b and e >= a. Trip bounds drive the month,
range, day and year views; stop bounds are used for stop detail on a day.
"""

import calendar
from datetime import date, timedelta
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from travelplanner.config import settings
from travelplanner.core.exceptions import InvalidDateRangeError, ValidationError
from travelplanner.core.logging import log_execution_time
from travelplanner.models.trip.trip import Trip
from travelplanner.models.trip.trip_stop import TripStop
from travelplanner.repositories.trip.trip_repository import TripRepository
from travelplanner.schemas.calendar import (
    CalendarRangeTrip,
    CalendarTrip,
    DateRange,
    DateRangeCalendarResponse,
    DayCalendarResponse,
    MonthCalendarResponse,
    MonthlyOverview,
    YearlySummary,
    YearOverviewResponse,
)
from travelplanner.services.base.base_service import BaseService, Clock
from travelplanner.services.base.service_result import ServiceResult
from travelplanner.services.trip.trip_metrics import (
    build_stop_out,
    calculate_duration_days,
    calculate_trip_metrics,
    format_destinations,
    inclusive_calendar_days,
    ordered_stops,
)

MIN_YEAR = 1
MAX_YEAR = 9999


# -------------------------------------------------------------------------
# Overlap primitive
# -------------------------------------------------------------------------


def ranges_overlap(start: date, end: date, range_start: date, range_end: date) -> bool:
    return start <= range_end and end >= range_start


def touches_day(start: date, end: date, day: date) -> bool:
    return start <= day <= end


def trip_touches_day(trip: Trip, day: date) -> bool:
    return touches_day(trip.start_date, trip.end_date, day)


def stop_touches(stop: TripStop, day: date) -> bool:
    return touches_day(stop.start_date, stop.end_date, day)


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def build_day_index(trips: Sequence[Trip], start: date, end: date) -> Dict[date, List[str]]:
    """
    Map each day in [start, end] to the ids of trips touching it.

    Trip order is preserved within each day. Malformed trips raise
    InvalidTripDataError.
    """
    index: Dict[date, List[str]] = {day: [] for day in iter_days(start, end)}
    for trip in trips:
        calculate_duration_days(trip.start_date, trip.end_date, trip.id)
        first = max(trip.start_date, start)
        last = min(trip.end_date, end)
        for day in iter_days(first, last):
            index[day].append(trip.id)
    return index


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a month, validating both parts."""
    validate_year(year)
    if not 1 <= month <= 12:
        raise ValidationError(
            "Month must be between 1 and 12",
            field_errors={"month": [f"Invalid month: {month}"]},
        )
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def validate_year(year: int) -> None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(
            f"Year must be between {MIN_YEAR} and {MAX_YEAR}",
            field_errors={"year": [f"Invalid year: {year}"]},
        )


def to_calendar_trip(trip: Trip) -> CalendarTrip:
    return CalendarTrip(
        id=trip.id,
        name=trip.name,
        description=trip.description,
        start_date=trip.start_date,
        end_date=trip.end_date,
        cover_photo=trip.cover_photo,
        is_public=bool(trip.is_public),
        duration_days=inclusive_calendar_days(trip.start_date, trip.end_date, trip.id),
        destinations=format_destinations(trip),
    )


# -------------------------------------------------------------------------
# Service
# -------------------------------------------------------------------------


class CalendarService(BaseService[Trip, TripRepository]):
    """
    Calendar views over the requester's own trips.

    Features:
    - Month view with a per-day trip index
    - Arbitrary date-range view with full trip metrics
    - Single day view with the stops touching the day
    - Year overview with monthly buckets and a yearly summary
    """

    def __init__(
        self,
        db_session: Session,
        clock: Optional[Clock] = None,
        month_preview_limit: Optional[int] = None,
    ):
        super().__init__(TripRepository(db_session), db_session, clock)
        self.month_preview_limit = month_preview_limit or settings.calendar.MONTH_PREVIEW_LIMIT

    def get_trips_for_month(
        self,
        requester_id: str,
        year: int,
        month: int,
    ) -> ServiceResult[MonthCalendarResponse]:
        try:
            first_day, last_day = month_bounds(year, month)
            trips = self.repository.find_for_owner_in_range(requester_id, first_day, last_day)

            return ServiceResult.success(
                MonthCalendarResponse(
                    trips=[to_calendar_trip(trip) for trip in trips],
                    days=build_day_index(trips, first_day, last_day),
                    month=month,
                    year=year,
                    total=len(trips),
                )
            )
        except Exception as e:
            return self._handle_exception(e, "fetch calendar month", requester_id, f"{year}-{month}")

    def get_trips_for_date_range(
        self,
        requester_id: str,
        start_date: date,
        end_date: date,
    ) -> ServiceResult[DateRangeCalendarResponse]:
        try:
            if start_date > end_date:
                raise InvalidDateRangeError(
                    "Start date cannot be after end date",
                    start_date=start_date,
                    end_date=end_date,
                )

            trips = self.repository.find_for_owner_in_range(requester_id, start_date, end_date)
            results = []
            for trip in trips:
                metrics = calculate_trip_metrics(trip, requester_id)
                results.append(
                    CalendarRangeTrip(
                        **metrics.model_dump(),
                        destinations=format_destinations(trip),
                        calendar_days=metrics.duration_days + 1,
                    )
                )

            return ServiceResult.success(
                DateRangeCalendarResponse(
                    trips=results,
                    date_range=DateRange(start_date=start_date, end_date=end_date),
                    total=len(results),
                )
            )
        except Exception as e:
            return self._handle_exception(e, "fetch calendar date range", requester_id)

    def get_trips_for_day(self, requester_id: str, day: date) -> ServiceResult[DayCalendarResponse]:
        try:
            trips = self.repository.find_for_owner_in_range(requester_id, day, day)
            stops = [
                build_stop_out(stop)
                for trip in trips
                for stop in ordered_stops(trip)
                if stop_touches(stop, day)
            ]

            return ServiceResult.success(
                DayCalendarResponse(
                    date=day,
                    trips=[to_calendar_trip(trip) for trip in trips],
                    stops=stops,
                    total=len(trips),
                )
            )
        except Exception as e:
            return self._handle_exception(e, "fetch calendar day", requester_id, day)

    @log_execution_time()
    def get_yearly_overview(self, requester_id: str, year: int) -> ServiceResult[YearOverviewResponse]:
        """
        Twelve monthly buckets plus a yearly summary.

        A trip spanning several months appears in each month's bucket but is
        counted once in ``total_trips``; its full inclusive duration counts
        toward ``total_travel_days``.
        """
        try:
            validate_year(year)
            year_start, year_end = date(year, 1, 1), date(year, 12, 31)
            trips = self.repository.find_for_owner_in_range(requester_id, year_start, year_end)
            calendar_trips = {trip.id: to_calendar_trip(trip) for trip in trips}

            monthly_overview: List[MonthlyOverview] = []
            for month in range(1, 13):
                first_day, last_day = month_bounds(year, month)
                month_trips = [
                    trip for trip in trips
                    if ranges_overlap(trip.start_date, trip.end_date, first_day, last_day)
                ]
                monthly_overview.append(
                    MonthlyOverview(
                        month=month,
                        month_name=calendar.month_name[month],
                        trip_count=len(month_trips),
                        trips=[calendar_trips[trip.id] for trip in month_trips[: self.month_preview_limit]],
                    )
                )

            busiest = monthly_overview[0]
            for overview in monthly_overview[1:]:
                if overview.trip_count > busiest.trip_count:
                    busiest = overview

            summary = YearlySummary(
                total_trips=len(trips),
                total_travel_days=sum(item.duration_days for item in calendar_trips.values()),
                busiest_month=busiest,
            )

            return ServiceResult.success(
                YearOverviewResponse(
                    year=year,
                    monthly_overview=monthly_overview,
                    yearly_summary=summary,
                )
            )
        except Exception as e:
            return self._handle_exception(e, "fetch yearly overview", requester_id, year)
