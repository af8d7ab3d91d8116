from datetime import date, datetime, time, timezone
from decimal import Decimal

import pytest

from travelplanner.core.exceptions import InvalidTripDataError
from travelplanner.models import Activity, ActivityCategory, City, Trip, TripActivity, TripStop
from travelplanner.services.trip.trip_metrics import (
    add_countdown,
    calculate_days_until_trip,
    calculate_duration_days,
    calculate_stop_costs,
    calculate_trip_metrics,
    effective_cost,
    format_destinations,
    inclusive_calendar_days,
    ordered_activities,
)

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _city(city_id: str, name: str) -> City:
    return City(id=city_id, name=name, country="France")


def _activity(activity_id: str, min_cost=None, max_cost=None) -> Activity:
    return Activity(
        id=activity_id,
        city_id="c-paris",
        name=f"Activity {activity_id}",
        category=ActivityCategory.CULTURE,
        min_cost=min_cost,
        max_cost=max_cost,
    )


def _scheduled(item_id, activity, day, at=None, min_override=None, max_override=None) -> TripActivity:
    return TripActivity(
        id=item_id,
        trip_stop_id="s1",
        activity_id=activity.id,
        activity=activity,
        date=day,
        time=at,
        min_cost_override=min_override,
        max_cost_override=max_override,
    )


def _trip(stops=None, owner="u1") -> Trip:
    return Trip(
        id="t1",
        user_id=owner,
        name="Spring in France",
        start_date=date(2024, 3, 1),
        end_date=date(2024, 3, 10),
        is_public=False,
        created_at=CREATED,
        trip_stops=stops or [],
    )


class TestDurations:
    def test_plain_day_difference(self):
        assert calculate_duration_days(date(2024, 1, 5), date(2024, 1, 15)) == 10

    def test_same_day_trip_is_zero(self):
        assert calculate_duration_days(date(2024, 1, 5), date(2024, 1, 5)) == 0

    def test_partial_days_round_up(self):
        start = datetime(2024, 1, 5, 0, 0)
        end = datetime(2024, 1, 6, 1, 0)
        assert calculate_duration_days(start, end) == 2

    def test_inverted_range_is_rejected(self):
        with pytest.raises(InvalidTripDataError):
            calculate_duration_days(date(2024, 1, 15), date(2024, 1, 5), "t1")

    def test_missing_date_is_rejected(self):
        with pytest.raises(InvalidTripDataError):
            calculate_duration_days(None, date(2024, 1, 5))

    def test_inclusive_days_count_both_ends(self):
        assert inclusive_calendar_days(date(2024, 1, 5), date(2024, 1, 15)) == 11


class TestCountdown:
    def test_rounds_up_to_whole_days(self):
        now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert calculate_days_until_trip(date(2024, 5, 10), now) == 9

    def test_started_trip_is_clamped_to_zero(self):
        now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert calculate_days_until_trip(date(2024, 4, 20), now) == 0

    def test_naive_now_is_treated_as_utc(self):
        assert calculate_days_until_trip(date(2024, 5, 2), datetime(2024, 5, 1, 0, 0)) == 1


class TestCosts:
    def test_override_wins_over_base(self):
        assert effective_cost(Decimal("50"), Decimal("20")) == Decimal("50")

    def test_zero_override_is_respected(self):
        assert effective_cost(Decimal("0"), Decimal("20")) == Decimal("0")

    def test_base_used_without_override(self):
        assert effective_cost(None, Decimal("20")) == Decimal("20")

    def test_missing_costs_count_as_zero(self):
        assert effective_cost(None, None) == Decimal("0")

    def test_stop_costs_sum_effective_values(self):
        louvre = _activity("a1", Decimal("15"), Decimal("20"))
        free = _activity("a2")
        items = [
            _scheduled("ta1", louvre, date(2024, 3, 2), max_override=Decimal("50")),
            _scheduled("ta2", free, date(2024, 3, 2)),
        ]
        assert calculate_stop_costs(items) == (Decimal("15"), Decimal("50"))


class TestOrdering:
    def test_unscheduled_activities_come_first_within_a_day(self):
        activity = _activity("a1")
        stop = TripStop(
            id="s1",
            trip_id="t1",
            city_id="c-paris",
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 5),
            order_index=1,
            trip_activities=[
                _scheduled("late", activity, date(2024, 3, 2), time(18, 0)),
                _scheduled("next-day", activity, date(2024, 3, 3)),
                _scheduled("anytime", activity, date(2024, 3, 2)),
                _scheduled("early", activity, date(2024, 3, 2), time(9, 0)),
            ],
        )
        assert [item.id for item in ordered_activities(stop)] == ["anytime", "early", "late", "next-day"]


class TestTripMetrics:
    def _stops(self):
        louvre = _activity("a1", Decimal("15"), Decimal("20"))
        cruise = _activity("a2", Decimal("20"), Decimal("40"))
        lyon = TripStop(
            id="s2",
            trip_id="t1",
            city_id="c-lyon",
            city=_city("c-lyon", "Lyon"),
            start_date=date(2024, 3, 6),
            end_date=date(2024, 3, 10),
            order_index=2,
        )
        paris = TripStop(
            id="s1",
            trip_id="t1",
            city_id="c-paris",
            city=_city("c-paris", "Paris"),
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 5),
            order_index=1,
            trip_activities=[
                _scheduled("ta1", louvre, date(2024, 3, 2)),
                _scheduled("ta2", cruise, date(2024, 3, 3), min_override=Decimal("25")),
            ],
        )
        return [lyon, paris]

    def test_metrics_summarize_the_trip(self):
        metrics = calculate_trip_metrics(_trip(self._stops()), requester_id="u1")

        assert metrics.trip_stops_count == 2
        assert metrics.duration_days == 9
        assert metrics.total_activities == 2
        assert metrics.is_owner is True
        assert metrics.estimated_min_cost == Decimal("40")
        assert metrics.estimated_max_cost == Decimal("60")

    def test_stops_are_returned_in_visiting_order(self):
        metrics = calculate_trip_metrics(_trip(self._stops()))
        assert [stop.order_index for stop in metrics.trip_stops] == [1, 2]
        assert metrics.trip_stops[0].min_cost == Decimal("40")
        assert metrics.trip_stops[1].min_cost == Decimal("0")

    def test_owner_flag_depends_on_requester(self):
        assert calculate_trip_metrics(_trip(), requester_id="u2").is_owner is False
        assert calculate_trip_metrics(_trip()).is_owner is None

    def test_serialized_keys_use_client_names(self):
        dumped = calculate_trip_metrics(_trip(self._stops())).model_dump(by_alias=True)
        assert "tripStops" in dumped
        assert "tripActivities" in dumped["tripStops"][0]

    def test_destinations_follow_stop_order(self):
        assert format_destinations(_trip(self._stops())) == "Paris, Lyon"
        assert format_destinations(_trip()) == "No destinations"

    def test_countdown_is_added(self):
        trip = _trip()
        trip.start_date = date(2024, 5, 3)
        trip.end_date = date(2024, 5, 6)
        result = add_countdown(trip, datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))
        assert result.days_until_trip == 2
        assert result.duration_days == 3

    def test_malformed_trip_is_rejected(self):
        trip = _trip()
        trip.end_date = date(2024, 2, 1)
        with pytest.raises(InvalidTripDataError):
            calculate_trip_metrics(trip)
