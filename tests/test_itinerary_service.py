import threading
from datetime import date, time
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from travelplanner.core.locks import KeyedLock
from travelplanner.db.session import build_engine
from travelplanner.models import Activity, ActivityCategory, Base, City, Trip, TripActivity, TripStop, User
from travelplanner.schemas.trip import TripActivityCreate, TripCreate, TripStopCreate
from travelplanner.services.base.service_result import ErrorCode
from travelplanner.services.trip.trip_itinerary_service import TripItineraryService


@pytest.fixture
def service(db_session, clock):
    return TripItineraryService(db_session, clock, locks=KeyedLock())


def _count(session, model) -> int:
    return session.execute(select(func.count()).select_from(model)).scalar_one()


def _trip_payload(seed, **overrides) -> TripCreate:
    data = dict(
        name="France by train",
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 10),
        stops=[
            TripStopCreate(
                city_id=seed.cities["paris"],
                start_date=date(2024, 6, 1),
                end_date=date(2024, 6, 5),
                activities=[
                    TripActivityCreate(
                        activity_id=seed.activities["louvre"],
                        date=date(2024, 6, 2),
                        max_cost_override=Decimal("50"),
                    ),
                    TripActivityCreate(
                        activity_id=seed.activities["cruise"],
                        date=date(2024, 6, 2),
                        time=time(19, 30),
                    ),
                ],
            ),
            TripStopCreate(
                city_id=seed.cities["lyon"],
                start_date=date(2024, 6, 6),
                end_date=date(2024, 6, 10),
            ),
        ],
    )
    data.update(overrides)
    return TripCreate(**data)


class TestCreateTrip:
    def test_nested_create(self, service, seed):
        result = service.create_trip(seed.users["alice"], _trip_payload(seed))

        assert result.is_success
        assert result.message == "Trip created successfully"
        trip = result.data
        assert trip.trip_stops_count == 2
        assert [stop.order_index for stop in trip.trip_stops] == [1, 2]
        assert trip.total_activities == 2
        assert trip.estimated_min_cost == Decimal("35.00")
        assert trip.estimated_max_cost == Decimal("90.00")
        assert trip.is_owner is True

    def test_failing_activity_leaves_nothing_behind(self, service, db_session, seed):
        payload = _trip_payload(seed)
        payload.stops[1].activities.append(
            TripActivityCreate(activity_id=seed.activities["colosseum"], date=date(2024, 6, 20))
        )

        result = service.create_trip(seed.users["alice"], payload)

        assert not result.is_success
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert _count(db_session, Trip) == 0
        assert _count(db_session, TripStop) == 0
        assert _count(db_session, TripActivity) == 0

    def test_unknown_city_rolls_back(self, service, db_session, seed):
        payload = _trip_payload(seed)
        payload.stops[1].city_id = "no-such-city"

        result = service.create_trip(seed.users["alice"], payload)

        assert result.error.code == ErrorCode.NOT_FOUND
        assert result.error.message == "City not found"
        assert _count(db_session, Trip) == 0

    def test_inverted_trip_range(self, service, seed):
        payload = _trip_payload(seed, start_date=date(2024, 6, 10), end_date=date(2024, 6, 1), stops=[])
        result = service.create_trip(seed.users["alice"], payload)
        assert result.error.code == ErrorCode.INVALID_DATE_RANGE

    def test_stop_outside_trip(self, service, seed):
        payload = _trip_payload(seed, end_date=date(2024, 6, 8))
        result = service.create_trip(seed.users["alice"], payload)
        assert result.error.message == "Stop dates must be within trip dates"

    def test_explicit_indexes_must_increase(self, service, seed):
        payload = _trip_payload(seed)
        payload.stops[0].order_index = 5
        payload.stops[1].order_index = 3

        result = service.create_trip(seed.users["alice"], payload)

        assert result.error.code == ErrorCode.VALIDATION_ERROR

    def test_duplicate_unscheduled_activity_is_a_conflict(self, service, seed):
        payload = _trip_payload(seed)
        duplicate = TripActivityCreate(activity_id=seed.activities["louvre"], date=date(2024, 6, 3))
        payload.stops[0].activities.extend([duplicate, duplicate])

        result = service.create_trip(seed.users["alice"], payload)

        assert result.error.code == ErrorCode.CONFLICT


class TestStops:
    def test_add_stop_appends_after_last(self, service, make_trip, seed):
        trip_id = make_trip(
            "alice", date(2024, 6, 1), date(2024, 6, 10),
            stops=[("paris", date(2024, 6, 1), date(2024, 6, 5))],
        )

        result = service.add_stop(
            seed.users["alice"],
            trip_id,
            TripStopCreate(city_id=seed.cities["lyon"], start_date=date(2024, 6, 6), end_date=date(2024, 6, 10)),
        )

        assert result.is_success
        assert result.data.order_index == 2
        assert result.data.city.name == "Lyon"

    def test_first_stop_gets_index_one(self, service, make_trip, seed):
        trip_id = make_trip("alice", date(2024, 6, 1), date(2024, 6, 10))

        result = service.add_stop(
            seed.users["alice"],
            trip_id,
            TripStopCreate(city_id=seed.cities["paris"], start_date=date(2024, 6, 1), end_date=date(2024, 6, 2)),
        )

        assert result.data.order_index == 1

    def test_explicit_index_not_above_max_is_rejected(self, service, make_trip, seed):
        trip_id = make_trip(
            "alice", date(2024, 6, 1), date(2024, 6, 10),
            stops=[("paris", date(2024, 6, 1), date(2024, 6, 5))],
        )

        result = service.add_stop(
            seed.users["alice"],
            trip_id,
            TripStopCreate(
                city_id=seed.cities["lyon"],
                start_date=date(2024, 6, 6),
                end_date=date(2024, 6, 10),
                order_index=1,
            ),
        )

        assert result.error.code == ErrorCode.VALIDATION_ERROR

    def test_only_owner_may_add(self, service, make_trip, seed):
        trip_id = make_trip("alice", date(2024, 6, 1), date(2024, 6, 10), is_public=True)

        result = service.add_stop(
            seed.users["bob"],
            trip_id,
            TripStopCreate(city_id=seed.cities["paris"], start_date=date(2024, 6, 1), end_date=date(2024, 6, 2)),
        )

        assert result.error.code == ErrorCode.NOT_FOUND

    def test_remove_stop_cascades_to_activities(self, service, db_session, make_trip, seed):
        trip_id = make_trip(
            "alice", date(2024, 6, 1), date(2024, 6, 10),
            stops=[("paris", date(2024, 6, 1), date(2024, 6, 5), [("louvre", date(2024, 6, 2), None, None)])],
        )
        stop_id = db_session.execute(select(TripStop.id).where(TripStop.trip_id == trip_id)).scalar_one()

        result = service.remove_stop(seed.users["alice"], trip_id, stop_id)

        assert result.is_success
        assert _count(db_session, TripStop) == 0
        assert _count(db_session, TripActivity) == 0


class TestActivities:
    @pytest.fixture
    def stop(self, make_trip, db_session):
        trip_id = make_trip(
            "alice", date(2024, 6, 1), date(2024, 6, 10),
            stops=[("paris", date(2024, 6, 1), date(2024, 6, 5))],
        )
        stop_id = db_session.execute(select(TripStop.id).where(TripStop.trip_id == trip_id)).scalar_one()
        return trip_id, stop_id

    def test_add_activity_with_override(self, service, stop, seed):
        trip_id, stop_id = stop

        result = service.add_activity(
            seed.users["alice"],
            trip_id,
            stop_id,
            TripActivityCreate(
                activity_id=seed.activities["louvre"],
                date=date(2024, 6, 3),
                time=time(10, 0),
                min_cost_override=Decimal("0"),
            ),
        )

        assert result.is_success
        assert result.data.activity.name == "Louvre Museum"
        assert result.data.min_cost_override == Decimal("0")

    def test_activity_outside_stop(self, service, stop, seed):
        trip_id, stop_id = stop

        result = service.add_activity(
            seed.users["alice"],
            trip_id,
            stop_id,
            TripActivityCreate(activity_id=seed.activities["louvre"], date=date(2024, 6, 8)),
        )

        assert result.error.message == "Activity date must be within trip stop dates"

    def test_unknown_activity(self, service, stop, seed):
        trip_id, stop_id = stop

        result = service.add_activity(
            seed.users["alice"],
            trip_id,
            stop_id,
            TripActivityCreate(activity_id="nope", date=date(2024, 6, 2)),
        )

        assert result.error.message == "Activity not found"

    def test_same_slot_twice_is_a_conflict(self, service, stop, seed):
        trip_id, stop_id = stop
        payload = TripActivityCreate(activity_id=seed.activities["cruise"], date=date(2024, 6, 2), time=time(20, 0))

        assert service.add_activity(seed.users["alice"], trip_id, stop_id, payload).is_success
        result = service.add_activity(seed.users["alice"], trip_id, stop_id, payload)

        assert result.error.code == ErrorCode.CONFLICT

    def test_remove_activity(self, service, stop, db_session, seed):
        trip_id, stop_id = stop
        added = service.add_activity(
            seed.users["alice"],
            trip_id,
            stop_id,
            TripActivityCreate(activity_id=seed.activities["louvre"], date=date(2024, 6, 2)),
        ).data

        result = service.remove_activity(seed.users["alice"], trip_id, stop_id, added.id)

        assert result.is_success
        assert _count(db_session, TripActivity) == 0

    def test_unscheduled_slot_is_unique_in_the_database(self, stop, db_session, seed):
        _, stop_id = stop
        for _ in range(2):
            db_session.add(TripActivity(trip_stop_id=stop_id, activity_id=seed.activities["walk"], date=date(2024, 6, 2)))

        with pytest.raises(IntegrityError):
            db_session.flush()
        db_session.rollback()

    def test_remove_activity_from_wrong_stop(self, service, stop, seed):
        trip_id, stop_id = stop
        result = service.remove_activity(seed.users["alice"], trip_id, stop_id, "missing")
        assert result.error.message == "Trip activity not found"


class TestDeleteTrip:
    def test_delete_cascades(self, service, db_session, make_trip, seed):
        trip_id = make_trip(
            "alice", date(2024, 6, 1), date(2024, 6, 10),
            stops=[("paris", date(2024, 6, 1), date(2024, 6, 5), [("louvre", date(2024, 6, 2), None, None)])],
        )

        result = service.delete_trip(seed.users["alice"], trip_id)

        assert result.message == "Trip deleted successfully"
        assert _count(db_session, Trip) == 0
        assert _count(db_session, TripStop) == 0
        assert _count(db_session, TripActivity) == 0

    def test_non_owner_cannot_delete(self, service, db_session, make_trip, seed):
        trip_id = make_trip("alice", date(2024, 6, 1), date(2024, 6, 10), is_public=True)

        result = service.delete_trip(seed.users["bob"], trip_id)

        assert result.error.code == ErrorCode.NOT_FOUND
        assert _count(db_session, Trip) == 1


class TestConcurrentAppends:
    """Parallel appends to one trip, each thread with its own session."""

    @pytest.fixture
    def file_sessions(self, tmp_path):
        engine = build_engine(f"sqlite:///{tmp_path / 'concurrency.db'}", echo=False)
        Base.metadata.create_all(bind=engine)
        yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
        engine.dispose()

    def test_order_indexes_stay_unique(self, file_sessions, clock):
        owner_id, trip_id, city_id = _seed_owner_with_trip(file_sessions)
        locks = KeyedLock()
        results = []
        results_guard = threading.Lock()

        def append_stop():
            session = file_sessions()
            try:
                result = TripItineraryService(session, clock, locks=locks).add_stop(
                    owner_id,
                    trip_id,
                    TripStopCreate(city_id=city_id, start_date=date(2024, 6, 1), end_date=date(2024, 6, 2)),
                )
                with results_guard:
                    results.append(result)
            finally:
                session.close()

        threads = [threading.Thread(target=append_stop) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(result.is_success for result in results)
        assert sorted(result.data.order_index for result in results) == list(range(1, 9))
        assert len(locks) == 0

    def test_unscheduled_activity_is_booked_once(self, file_sessions, clock):
        owner_id, trip_id, city_id = _seed_owner_with_trip(file_sessions)
        stop_id, activity_id = _seed_stop_with_activity(file_sessions, trip_id, city_id)
        locks = KeyedLock()
        results = []
        results_guard = threading.Lock()

        def book_walk():
            session = file_sessions()
            try:
                result = TripItineraryService(session, clock, locks=locks).add_activity(
                    owner_id,
                    trip_id,
                    stop_id,
                    TripActivityCreate(activity_id=activity_id, date=date(2024, 6, 2)),
                )
                with results_guard:
                    results.append(result)
            finally:
                session.close()

        threads = [threading.Thread(target=book_walk) for _ in range(6)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sum(result.is_success for result in results) == 1
        assert all(result.error.code == ErrorCode.CONFLICT for result in results if not result.is_success)

        session = file_sessions()
        try:
            assert _count(session, TripActivity) == 1
        finally:
            session.close()


def _seed_stop_with_activity(session_factory, trip_id, city_id):
    session = session_factory()
    try:
        stop = TripStop(
            trip_id=trip_id,
            city_id=city_id,
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 5),
            order_index=1,
        )
        walk = Activity(city_id=city_id, name="Canal Walk", category=ActivityCategory.NATURE)
        session.add_all([stop, walk])
        session.commit()
        return stop.id, walk.id
    finally:
        session.close()


def _seed_owner_with_trip(session_factory):
    session = session_factory()
    try:
        owner = User(
            first_name="Dana",
            last_name="Traveler",
            username="dana",
            email="dana@example.com",
            country="Wonderland",
        )
        city = City(name="Paris", country="France")
        session.add_all([owner, city])
        session.flush()
        trip = Trip(user_id=owner.id, name="Busy trip", start_date=date(2024, 6, 1), end_date=date(2024, 6, 30))
        session.add(trip)
        session.commit()
        return owner.id, trip.id, city.id
    finally:
        session.close()
