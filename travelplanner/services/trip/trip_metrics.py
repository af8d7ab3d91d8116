"""
Trip metrics and cost calculator.

Pure functions deriving summary values from a loaded trip graph:
durations, counts, ownership, countdowns and min/max cost totals.
Nothing here touches the session; callers pass fully loaded trips.
"""

import math
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from travelplanner.core.constants import NO_DESTINATIONS
from travelplanner.core.exceptions import InvalidTripDataError
from travelplanner.models.trip.trip import Trip
from travelplanner.models.trip.trip_activity import TripActivity
from travelplanner.models.trip.trip_stop import TripStop
from travelplanner.schemas.location import ActivityOut, CityOut
from travelplanner.schemas.trip import (
    TripActivityOut,
    TripStopOut,
    TripWithCountdown,
    TripWithMetrics,
)

ZERO = Decimal("0")
SECONDS_PER_DAY = 86400


# -------------------------------------------------------------------------
# Durations
# -------------------------------------------------------------------------


def _require_range(start, end, trip_id: Optional[str] = None) -> None:
    if start is None or end is None:
        raise InvalidTripDataError("Trip is missing start_date or end_date", trip_id)
    if end < start:
        raise InvalidTripDataError(
            f"Trip end_date {end.isoformat()} is before start_date {start.isoformat()}",
            trip_id,
        )


def calculate_duration_days(start, end, trip_id: Optional[str] = None) -> int:
    """
    Whole days from start to end, rounded up.

    For calendar dates this is the plain day difference (Jan 5 -> Jan 15 is 10).
    """
    _require_range(start, end, trip_id)
    if isinstance(start, datetime) and isinstance(end, datetime):
        return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)
    return (end - start).days


def inclusive_calendar_days(start: date, end: date, trip_id: Optional[str] = None) -> int:
    """Calendar days touched by the range, counting both ends."""
    return calculate_duration_days(start, end, trip_id) + 1


def calculate_days_until_trip(start_date: date, now: datetime) -> int:
    """
    Days from ``now`` until the start of ``start_date``, rounded up.

    Clamped to 0 once the trip has started.
    """
    if start_date is None:
        raise InvalidTripDataError("Trip is missing start_date")
    tz = now.tzinfo or timezone.utc
    if now.tzinfo is None:
        now = now.replace(tzinfo=tz)
    start_of_day = datetime.combine(start_date, time.min, tzinfo=tz)
    remaining = math.ceil((start_of_day - now).total_seconds() / SECONDS_PER_DAY)
    return max(remaining, 0)


# -------------------------------------------------------------------------
# Ordering helpers
# -------------------------------------------------------------------------


def ordered_stops(trip: Trip) -> List[TripStop]:
    return sorted(trip.trip_stops or [], key=lambda stop: stop.order_index)


def ordered_activities(stop: TripStop) -> List[TripActivity]:
    # Unscheduled (time is NULL) activities come first within a day
    return sorted(
        stop.trip_activities or [],
        key=lambda item: (item.date, item.time is not None, item.time or time.min),
    )


def format_destinations(trip: Trip) -> str:
    """Stop city names joined in visiting order."""
    names = [stop.city.name for stop in ordered_stops(trip) if stop.city is not None and stop.city.name]
    return ", ".join(names) if names else NO_DESTINATIONS


# -------------------------------------------------------------------------
# Costs
# -------------------------------------------------------------------------


def effective_cost(override: Optional[Decimal], base: Optional[Decimal]) -> Decimal:
    """
    Cost used for totals: an explicit override (including 0) wins,
    then the catalog base cost, then zero.
    """
    if override is not None:
        return Decimal(override)
    if base is not None:
        return Decimal(base)
    return ZERO


def calculate_stop_costs(activities: Iterable[TripActivity]) -> Tuple[Decimal, Decimal]:
    """Sum of effective (min, max) costs over a stop's activities."""
    min_total = ZERO
    max_total = ZERO
    for item in activities:
        activity = item.activity
        base_min = activity.min_cost if activity is not None else None
        base_max = activity.max_cost if activity is not None else None
        min_total += effective_cost(item.min_cost_override, base_min)
        max_total += effective_cost(item.max_cost_override, base_max)
    return min_total, max_total


def count_activities(stops: Sequence[TripStop]) -> int:
    return sum(len(stop.trip_activities or []) for stop in stops)


# -------------------------------------------------------------------------
# Schema builders
# -------------------------------------------------------------------------


def build_trip_activity_out(item: TripActivity) -> TripActivityOut:
    return TripActivityOut(
        id=item.id,
        trip_stop_id=item.trip_stop_id,
        activity_id=item.activity_id,
        date=item.date,
        time=item.time,
        min_cost_override=item.min_cost_override,
        max_cost_override=item.max_cost_override,
        activity=ActivityOut.model_validate(item.activity) if item.activity is not None else None,
    )


def build_stop_out(stop: TripStop) -> TripStopOut:
    """Stop with its activities in schedule order and its cost totals."""
    activities = ordered_activities(stop)
    min_cost, max_cost = calculate_stop_costs(activities)
    return TripStopOut(
        id=stop.id,
        trip_id=stop.trip_id,
        city_id=stop.city_id,
        start_date=stop.start_date,
        end_date=stop.end_date,
        order_index=stop.order_index,
        city=CityOut.model_validate(stop.city) if stop.city is not None else None,
        min_cost=min_cost,
        max_cost=max_cost,
        trip_activities=[build_trip_activity_out(item) for item in activities],
    )


def _metrics_fields(trip: Trip, requester_id: Optional[str]) -> dict:
    stops = ordered_stops(trip)
    stop_outs = [build_stop_out(stop) for stop in stops]

    return {
        "id": trip.id,
        "user_id": trip.user_id,
        "name": trip.name,
        "description": trip.description,
        "start_date": trip.start_date,
        "end_date": trip.end_date,
        "cover_photo": trip.cover_photo,
        "is_public": bool(trip.is_public),
        "created_at": trip.created_at,
        "trip_stops_count": len(stops),
        "duration_days": calculate_duration_days(trip.start_date, trip.end_date, trip.id),
        "total_activities": count_activities(stops),
        "is_owner": (trip.user_id == requester_id) if requester_id else None,
        "estimated_min_cost": sum((stop.min_cost for stop in stop_outs), ZERO),
        "estimated_max_cost": sum((stop.max_cost for stop in stop_outs), ZERO),
        "trip_stops": stop_outs,
    }


def calculate_trip_metrics(trip: Trip, requester_id: Optional[str] = None) -> TripWithMetrics:
    """
    Annotate a loaded trip with its summary metrics.

    Raises:
        InvalidTripDataError: If the trip dates are missing or inverted
    """
    return TripWithMetrics(**_metrics_fields(trip, requester_id))


def add_countdown(
    trip: Trip,
    now: datetime,
    requester_id: Optional[str] = None,
) -> TripWithCountdown:
    """Trip metrics plus days until departure."""
    fields = _metrics_fields(trip, requester_id)
    fields["days_until_trip"] = calculate_days_until_trip(trip.start_date, now)
    return TripWithCountdown(**fields)


__all__ = [
    "calculate_duration_days",
    "inclusive_calendar_days",
    "calculate_days_until_trip",
    "ordered_stops",
    "ordered_activities",
    "format_destinations",
    "effective_cost",
    "calculate_stop_costs",
    "count_activities",
    "build_trip_activity_out",
    "build_stop_out",
    "calculate_trip_metrics",
    "add_countdown",
]
