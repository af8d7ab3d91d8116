"""
Trip activity repository.
"""

from datetime import date, time
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from travelplanner.core.exceptions import RepositoryError
from travelplanner.models.trip.trip_activity import TripActivity
from travelplanner.repositories.base.base_repository import BaseRepository


class TripActivityRepository(BaseRepository[TripActivity]):
    """Repository for activities scheduled on stops."""

    def __init__(self, db: Session):
        super().__init__(TripActivity, db)

    def find_in_stop(self, trip_activity_id: str, stop_id: str) -> Optional[TripActivity]:
        return self.find_one_by_criteria({"id": trip_activity_id, "trip_stop_id": stop_id})

    def slot_taken(
        self,
        stop_id: str,
        activity_id: str,
        day: date,
        at: Optional[time] = None,
    ) -> bool:
        """
        Whether the activity is already scheduled on the stop at that slot.

        Unscheduled (NULL time) slots are compared explicitly since unique
        constraints treat NULLs as distinct.
        """
        stmt = select(func.count()).select_from(TripActivity).where(
            TripActivity.trip_stop_id == stop_id,
            TripActivity.activity_id == activity_id,
            TripActivity.date == day,
            TripActivity.time.is_(None) if at is None else TripActivity.time == at,
        )
        try:
            return int(self.db.execute(stmt).scalar_one()) > 0
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to check activity slot", table=self.table_name) from e
