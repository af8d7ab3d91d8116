from datetime import date, datetime, timezone

import pytest

from travelplanner.services.base.service_result import ErrorCode
from travelplanner.services.trip.regional_selection_service import RegionalSelectionService


@pytest.fixture
def service(db_session, clock):
    return RegionalSelectionService(db_session, clock)


def test_wonderland_example(service, make_trip, seed):
    trip_a = make_trip("alice", date(2024, 6, 1), date(2024, 6, 10), name="Trip A", is_public=True)
    make_trip("alice", date(2024, 6, 1), date(2024, 6, 10), name="Trip B private")
    make_trip("alice", date(2024, 3, 1), date(2024, 3, 10), name="Trip C ended", is_public=True)
    make_trip("bob", date(2024, 7, 1), date(2024, 7, 3), name="Bob's own", is_public=True)
    make_trip("carol", date(2024, 7, 1), date(2024, 7, 3), name="Elsewhere", is_public=True)

    result = service.get_regional_selections(seed.users["bob"])

    assert result.is_success
    assert result.data.region == "Wonderland"
    assert [trip.id for trip in result.data.trips] == [trip_a]
    assert result.data.trips[0].is_owner is False
    assert result.data.pagination.total == 1


def test_trip_ending_today_is_still_selected(service, make_trip, seed):
    trip_id = make_trip("alice", date(2024, 4, 20), date(2024, 5, 1), is_public=True)

    result = service.get_regional_selections(seed.users["bob"])

    assert [trip.id for trip in result.data.trips] == [trip_id]


def test_newest_first(service, make_trip, seed):
    older = make_trip(
        "alice", date(2024, 6, 1), date(2024, 6, 2), is_public=True,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    newer = make_trip(
        "alice", date(2024, 8, 1), date(2024, 8, 2), is_public=True,
        created_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
    )

    result = service.get_regional_selections(seed.users["bob"])

    assert [trip.id for trip in result.data.trips] == [newer, older]


def test_same_creation_time_ends_soonest_first(service, make_trip, seed):
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ends_later = make_trip("alice", date(2024, 6, 1), date(2024, 6, 20), is_public=True, created_at=created)
    ends_sooner = make_trip("alice", date(2024, 6, 1), date(2024, 6, 5), is_public=True, created_at=created)

    result = service.get_regional_selections(seed.users["bob"])

    assert [trip.id for trip in result.data.trips] == [ends_sooner, ends_later]


def test_pagination_is_clamped(service, make_trip, seed):
    for day in range(1, 4):
        make_trip("alice", date(2024, 6, day), date(2024, 6, day), is_public=True)

    result = service.get_regional_selections(seed.users["bob"], page="oops", limit="2")

    assert result.data.pagination.page == 1
    assert len(result.data.trips) == 2
    assert result.data.pagination.total_pages == 2
    assert result.data.pagination.has_next is True


def test_unknown_requester(service, seed):
    result = service.get_regional_selections("no-such-user")
    assert result.error.code == ErrorCode.NOT_FOUND
