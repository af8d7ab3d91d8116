"""
Shared fixtures: in-memory SQLite database, seeded catalog and users,
a fixed clock and an authenticated API client.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from travelplanner.api import deps
from travelplanner.core.security.jwt_handler import JWTManager
from travelplanner.db.init_db import drop_db, init_db
from travelplanner.db.session import enable_sqlite_foreign_keys, get_db
from travelplanner.models import (
    Activity,
    ActivityCategory,
    City,
    Trip,
    TripActivity,
    TripStop,
    User,
)

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    init_db(engine)
    yield engine
    drop_db(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


# --- Seed data -------------------------------------------------------------------


class Seed:
    """Ids of the seeded rows, for readable assertions."""

    def __init__(self):
        self.users = {}
        self.cities = {}
        self.activities = {}


def _user(key: str, country: str) -> User:
    return User(
        first_name=key.title(),
        last_name="Traveler",
        username=key,
        email=f"{key}@example.com",
        country=country,
    )


@pytest.fixture
def seed(db_session) -> Seed:
    data = Seed()

    users = {
        "alice": _user("alice", "Wonderland"),
        "bob": _user("bob", "Wonderland"),
        "carol": _user("carol", "Elsewhere"),
    }
    cities = {
        "paris": City(name="Paris", country="France", cost_index=Decimal("80.00"), popularity=95),
        "lyon": City(name="Lyon", country="France", cost_index=Decimal("55.00"), popularity=60),
        "rome": City(name="Rome", country="Italy", cost_index=Decimal("70.00"), popularity=90),
        "tokyo": City(name="Tokyo", country="Japan", cost_index=Decimal("85.00"), popularity=99),
        "oslo": City(name="Oslo", country="Norway", cost_index=Decimal("95.00"), popularity=None),
    }
    db_session.add_all(list(users.values()) + list(cities.values()))
    db_session.flush()

    activities = {
        "louvre": Activity(
            city_id=cities["paris"].id,
            name="Louvre Museum",
            category=ActivityCategory.CULTURE,
            min_cost=Decimal("15.00"),
            max_cost=Decimal("20.00"),
            duration=180,
        ),
        "cruise": Activity(
            city_id=cities["paris"].id,
            name="Seine Cruise",
            category=ActivityCategory.SIGHTSEEING,
            min_cost=Decimal("20.00"),
            max_cost=Decimal("40.00"),
            duration=60,
        ),
        "food_tour": Activity(
            city_id=cities["paris"].id,
            name="Marais Food Tour",
            category=ActivityCategory.FOOD,
            min_cost=Decimal("60.00"),
            max_cost=Decimal("90.00"),
        ),
        "walk": Activity(
            city_id=cities["paris"].id,
            name="Canal Walk",
            category=ActivityCategory.NATURE,
        ),
        "colosseum": Activity(
            city_id=cities["rome"].id,
            name="Colosseum",
            category=ActivityCategory.CULTURE,
            min_cost=Decimal("16.00"),
            max_cost=Decimal("25.00"),
        ),
    }
    db_session.add_all(activities.values())
    db_session.commit()

    data.users = {key: user.id for key, user in users.items()}
    data.cities = {key: city.id for key, city in cities.items()}
    data.activities = {key: activity.id for key, activity in activities.items()}
    return data


@pytest.fixture
def make_trip(db_session, seed) -> Callable[..., str]:
    """
    Insert a trip (optionally with stops) directly and return its id.

    Each stop is ``(city_key, start, end)`` or ``(city_key, start, end,
    [(activity_key, date, override_min, override_max), ...])``.
    """
    created_offset = [0]

    def _make(
        owner: str,
        start: date,
        end: date,
        name: str = "Trip",
        is_public: bool = False,
        stops: Optional[List[tuple]] = None,
        created_at: Optional[datetime] = None,
    ) -> str:
        created_offset[0] += 1
        trip = Trip(
            user_id=seed.users[owner],
            name=name,
            start_date=start,
            end_date=end,
            is_public=is_public,
            created_at=created_at or FIXED_NOW - timedelta(days=30) + timedelta(minutes=created_offset[0]),
        )
        for index, stop_spec in enumerate(stops or [], start=1):
            city_key, stop_start, stop_end = stop_spec[:3]
            stop = TripStop(
                city_id=seed.cities[city_key],
                start_date=stop_start,
                end_date=stop_end,
                order_index=index,
            )
            for activity_key, day, override_min, override_max in (stop_spec[3] if len(stop_spec) > 3 else []):
                stop.trip_activities.append(
                    TripActivity(
                        activity_id=seed.activities[activity_key],
                        date=day,
                        min_cost_override=override_min,
                        max_cost_override=override_max,
                    )
                )
            trip.trip_stops.append(stop)
        db_session.add(trip)
        db_session.commit()
        return trip.id

    return _make


# --- API -------------------------------------------------------------------------


@pytest.fixture
def jwt_manager() -> JWTManager:
    return JWTManager(secret_key=TEST_SECRET, algorithm="HS256", access_token_expire_minutes=30)


@pytest.fixture
def auth_headers(jwt_manager, seed) -> Callable[[str], dict]:
    def _headers(user_key: str) -> dict:
        token = jwt_manager.create_access_token(seed.users[user_key])
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def client(session_factory, jwt_manager, seed):
    from travelplanner.main import create_app

    app = create_app(initialize_db=False)

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[deps.get_clock] = lambda: fixed_clock
    app.dependency_overrides[deps.get_jwt_manager] = lambda: jwt_manager

    with TestClient(app) as test_client:
        yield test_client
