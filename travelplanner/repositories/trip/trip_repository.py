# travelplanner/repositories/trip/trip_repository.py
"""
Trip repository: parameterized trip queries returning nested itineraries.

Every read loads the full graph (trip -> stops -> city, stop -> activities
-> activity) in selectin batches, with stops ordered by order_index and
activities by (date, time).
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import Select

from travelplanner.core.exceptions import RepositoryError
from travelplanner.models.trip.trip import Trip
from travelplanner.models.trip.trip_stop import TripStop
from travelplanner.models.user.user import User
from travelplanner.repositories.base.base_repository import BaseRepository


def itinerary_options():
    """Loader options for the nested trip graph."""
    return (
        selectinload(Trip.trip_stops).selectinload(TripStop.trip_activities),
    )


class TripRepository(BaseRepository[Trip]):
    """
    Repository for trips.

    Provides:
    - Owner-scoped listings (previous, upcoming, calendar ranges)
    - Visibility-checked single trip lookup
    - Regional recommendation query
    - Row locking for itinerary writes
    """

    def __init__(self, db: Session):
        super().__init__(Trip, db)

    # ==================== OWNER LISTINGS ====================

    def find_previous_trips(
        self,
        owner_id: str,
        limit: int,
        offset: int = 0,
    ) -> List[Trip]:
        """
        Owner's trips ordered by end_date descending.

        No date filter is applied; ongoing and future trips are included.
        """
        stmt = (
            select(Trip)
            .where(Trip.user_id == owner_id)
            .order_by(Trip.end_date.desc(), Trip.id.asc())
            .offset(offset)
            .limit(limit)
            .options(*itinerary_options())
        )
        return self._fetch_all(stmt, "find previous trips")

    def count_previous_trips(self, owner_id: str) -> int:
        return self.count({"user_id": owner_id})

    def find_upcoming_trips(
        self,
        owner_id: str,
        today: date,
        limit: int,
        offset: int = 0,
    ) -> List[Trip]:
        """Owner's trips starting strictly after ``today``, soonest first."""
        stmt = (
            select(Trip)
            .where(Trip.user_id == owner_id, Trip.start_date > today)
            .order_by(Trip.start_date.asc(), Trip.id.asc())
            .offset(offset)
            .limit(limit)
            .options(*itinerary_options())
        )
        return self._fetch_all(stmt, "find upcoming trips")

    def count_upcoming_trips(self, owner_id: str, today: date) -> int:
        stmt = (
            select(func.count())
            .select_from(Trip)
            .where(Trip.user_id == owner_id, Trip.start_date > today)
        )
        return self._scalar_count(stmt, "count upcoming trips")

    def find_for_owner_in_range(
        self,
        owner_id: str,
        range_start: date,
        range_end: date,
    ) -> List[Trip]:
        """
        Owner's trips whose [start_date, end_date] intersects the range.
        """
        stmt = (
            select(Trip)
            .where(
                Trip.user_id == owner_id,
                Trip.start_date <= range_end,
                Trip.end_date >= range_start,
            )
            .order_by(Trip.start_date.asc(), Trip.id.asc())
            .options(*itinerary_options())
        )
        return self._fetch_all(stmt, "find trips in range")

    # ==================== SINGLE TRIP ====================

    def find_by_id_with_details(self, trip_id: str, requester_id: str) -> Optional[Trip]:
        """
        Trip visible to the requester (owner or public), else None.
        """
        stmt = (
            select(Trip)
            .where(
                Trip.id == trip_id,
                or_(Trip.user_id == requester_id, Trip.is_public.is_(True)),
            )
            .options(*itinerary_options())
        )
        return self._fetch_one(stmt, "find trip by id")

    def find_owned(self, trip_id: str, owner_id: str) -> Optional[Trip]:
        """Trip only when owned by ``owner_id``."""
        stmt = select(Trip).where(Trip.id == trip_id, Trip.user_id == owner_id)
        return self._fetch_one(stmt, "find owned trip")

    def lock_owned_for_update(self, trip_id: str, owner_id: str) -> Optional[Trip]:
        """
        Owned trip selected with a row lock.

        Backends without row locks (SQLite) ignore FOR UPDATE.
        """
        stmt = (
            select(Trip)
            .where(Trip.id == trip_id, Trip.user_id == owner_id)
            .with_for_update()
        )
        return self._fetch_one(stmt, "lock trip")

    # ==================== REGIONAL ====================

    def _regional_filter(
        self,
        requester_id: str,
        country: str,
        today: date,
    ):
        return and_(
            Trip.is_public.is_(True),
            User.country == country,
            Trip.user_id != requester_id,
            Trip.end_date >= today,
        )

    def find_regional_selections(
        self,
        requester_id: str,
        country: str,
        today: date,
        limit: int,
        offset: int = 0,
    ) -> List[Trip]:
        """
        Public, not-yet-ended trips of other users from the same country,
        newest first.
        """
        stmt = (
            select(Trip)
            .join(User, Trip.user_id == User.id)
            .where(self._regional_filter(requester_id, country, today))
            .order_by(Trip.created_at.desc(), Trip.end_date.asc(), Trip.id.asc())
            .offset(offset)
            .limit(limit)
            .options(*itinerary_options())
        )
        return self._fetch_all(stmt, "find regional selections")

    def count_regional_selections(self, requester_id: str, country: str, today: date) -> int:
        stmt = (
            select(func.count())
            .select_from(Trip)
            .join(User, Trip.user_id == User.id)
            .where(self._regional_filter(requester_id, country, today))
        )
        return self._scalar_count(stmt, "count regional selections")

    # ==================== HELPERS ====================

    def _fetch_all(self, stmt: Select, operation: str) -> List[Trip]:
        try:
            return list(self.db.execute(stmt).unique().scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to {operation}", table=self.table_name) from e

    def _fetch_one(self, stmt: Select, operation: str) -> Optional[Trip]:
        try:
            return self.db.execute(stmt).unique().scalars().first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to {operation}", table=self.table_name) from e

    def _scalar_count(self, stmt: Select, operation: str) -> int:
        try:
            return int(self.db.execute(stmt).scalar_one())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to {operation}", table=self.table_name) from e
