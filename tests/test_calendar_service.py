from datetime import date

import pytest

from travelplanner.services.base.service_result import ErrorCode
from travelplanner.services.trip.calendar_service import (
    CalendarService,
    build_day_index,
    month_bounds,
    ranges_overlap,
)
from travelplanner.core.exceptions import InvalidTripDataError, ValidationError


@pytest.fixture
def service(db_session, clock):
    return CalendarService(db_session, clock=clock, month_preview_limit=2)


class TestOverlapPrimitive:
    @pytest.mark.parametrize(
        "start, end, expected",
        [
            (date(2024, 1, 25), date(2024, 2, 2), True),
            (date(2024, 2, 29), date(2024, 3, 3), True),
            (date(2024, 2, 10), date(2024, 2, 12), True),
            (date(2024, 1, 1), date(2024, 1, 31), False),
            (date(2024, 3, 1), date(2024, 3, 2), False),
        ],
    )
    def test_ranges_against_february(self, start, end, expected):
        assert ranges_overlap(start, end, date(2024, 2, 1), date(2024, 2, 29)) is expected

    def test_month_bounds_handle_leap_years(self):
        assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
        assert month_bounds(2023, 2) == (date(2023, 2, 1), date(2023, 2, 28))

    def test_month_bounds_reject_bad_month(self):
        with pytest.raises(ValidationError):
            month_bounds(2024, 13)


class TestMonthView:
    def test_day_index_covers_every_day_of_the_month(self, service, make_trip, seed):
        trip_id = make_trip("alice", date(2024, 1, 30), date(2024, 2, 2))

        result = service.get_trips_for_month(seed.users["alice"], 2024, 2)

        assert result.is_success
        data = result.data
        assert len(data.days) == 29
        assert data.days[date(2024, 2, 1)] == [trip_id]
        assert data.days[date(2024, 2, 2)] == [trip_id]
        assert data.days[date(2024, 2, 3)] == []
        assert data.total == 1
        assert data.trips[0].duration_days == 4

    def test_month_view_is_idempotent(self, service, make_trip, seed):
        make_trip("alice", date(2024, 2, 10), date(2024, 2, 12), stops=[("paris", date(2024, 2, 10), date(2024, 2, 12))])
        requester = seed.users["alice"]

        first = service.get_trips_for_month(requester, 2024, 2).data
        second = service.get_trips_for_month(requester, 2024, 2).data

        assert first.model_dump() == second.model_dump()
        assert first.trips[0].destinations == "Paris"

    def test_only_own_trips_are_listed(self, service, make_trip, seed):
        make_trip("bob", date(2024, 2, 10), date(2024, 2, 12), is_public=True)
        result = service.get_trips_for_month(seed.users["alice"], 2024, 2)
        assert result.data.total == 0

    def test_invalid_month_is_a_validation_failure(self, service, seed):
        result = service.get_trips_for_month(seed.users["alice"], 2024, 0)
        assert not result.is_success
        assert result.error.code == ErrorCode.VALIDATION_ERROR


class TestDateRangeView:
    def test_trips_carry_metrics_and_calendar_days(self, service, make_trip, seed):
        make_trip(
            "alice",
            date(2024, 6, 1),
            date(2024, 6, 5),
            stops=[("rome", date(2024, 6, 1), date(2024, 6, 5), [("colosseum", date(2024, 6, 2), None, None)])],
        )

        result = service.get_trips_for_date_range(seed.users["alice"], date(2024, 6, 5), date(2024, 6, 30))

        trip = result.data.trips[0]
        assert trip.duration_days == 4
        assert trip.calendar_days == 5
        assert trip.destinations == "Rome"
        assert trip.total_activities == 1
        assert result.data.date_range.start_date == date(2024, 6, 5)

    def test_inverted_range_is_reported(self, service, seed):
        result = service.get_trips_for_date_range(seed.users["alice"], date(2024, 6, 30), date(2024, 6, 1))
        assert result.error.code == ErrorCode.INVALID_DATE_RANGE


class TestDayView:
    def test_only_stops_touching_the_day_are_listed(self, service, make_trip, seed):
        make_trip(
            "alice",
            date(2024, 3, 1),
            date(2024, 3, 10),
            stops=[
                ("paris", date(2024, 3, 1), date(2024, 3, 5)),
                ("lyon", date(2024, 3, 5), date(2024, 3, 10)),
            ],
        )

        on_fifth = service.get_trips_for_day(seed.users["alice"], date(2024, 3, 5)).data
        on_eighth = service.get_trips_for_day(seed.users["alice"], date(2024, 3, 8)).data

        assert on_fifth.total == 1
        assert [stop.city.name for stop in on_fifth.stops] == ["Paris", "Lyon"]
        assert [stop.city.name for stop in on_eighth.stops] == ["Lyon"]

    def test_empty_day(self, service, seed):
        data = service.get_trips_for_day(seed.users["alice"], date(2024, 3, 5)).data
        assert data.trips == []
        assert data.stops == []


class TestYearOverview:
    def test_single_january_trip(self, service, make_trip, seed):
        make_trip("alice", date(2024, 1, 5), date(2024, 1, 15))

        data = service.get_yearly_overview(seed.users["alice"], 2024).data

        assert len(data.monthly_overview) == 12
        assert data.yearly_summary.total_trips == 1
        assert data.yearly_summary.total_travel_days == 11
        assert data.yearly_summary.busiest_month.month == 1
        assert data.yearly_summary.busiest_month.month_name == "January"

    def test_year_boundary_trip_counts_in_both_years(self, service, make_trip, seed):
        make_trip("alice", date(2023, 12, 28), date(2024, 1, 3))
        requester = seed.users["alice"]

        previous = service.get_yearly_overview(requester, 2023).data
        current = service.get_yearly_overview(requester, 2024).data

        assert previous.monthly_overview[11].trip_count == 1
        assert current.monthly_overview[0].trip_count == 1
        assert previous.yearly_summary.total_travel_days == 7
        assert current.yearly_summary.total_travel_days == 7

    def test_multi_month_trip_counted_once(self, service, make_trip, seed):
        make_trip("alice", date(2024, 3, 25), date(2024, 4, 5))
        make_trip("alice", date(2024, 4, 10), date(2024, 4, 12))

        data = service.get_yearly_overview(seed.users["alice"], 2024).data

        assert data.yearly_summary.total_trips == 2
        assert data.monthly_overview[2].trip_count == 1
        assert data.monthly_overview[3].trip_count == 2
        assert data.yearly_summary.busiest_month.month == 4

    def test_preview_list_is_capped(self, service, make_trip, seed):
        for day in (1, 5, 9):
            make_trip("alice", date(2024, 7, day), date(2024, 7, day + 1))

        july = service.get_yearly_overview(seed.users["alice"], 2024).data.monthly_overview[6]

        assert july.trip_count == 3
        assert len(july.trips) == 2

    def test_empty_year_defaults_to_january(self, service, seed):
        data = service.get_yearly_overview(seed.users["alice"], 2030).data
        assert data.yearly_summary.busiest_month.month == 1
        assert data.yearly_summary.total_travel_days == 0

    def test_year_out_of_range(self, service, seed):
        result = service.get_yearly_overview(seed.users["alice"], 10000)
        assert result.error.code == ErrorCode.VALIDATION_ERROR


def test_day_index_rejects_malformed_trip():
    class Broken:
        id = "broken"
        start_date = date(2024, 2, 10)
        end_date = date(2024, 2, 1)

    with pytest.raises(InvalidTripDataError):
        build_day_index([Broken()], date(2024, 2, 1), date(2024, 2, 29))

