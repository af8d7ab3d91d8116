"""
Trip stop repository.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from travelplanner.core.exceptions import RepositoryError
from travelplanner.models.trip.trip_stop import TripStop
from travelplanner.repositories.base.base_repository import BaseRepository


class TripStopRepository(BaseRepository[TripStop]):
    """Repository for stops within a trip."""

    def __init__(self, db: Session):
        super().__init__(TripStop, db)

    def get_max_order_index(self, trip_id: str) -> int:
        """Highest order_index used by the trip, 0 when it has no stops."""
        try:
            stmt = select(func.max(TripStop.order_index)).where(TripStop.trip_id == trip_id)
            result = self.db.execute(stmt).scalar()
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to read stop order", table=self.table_name) from e
        return int(result) if result is not None else 0

    def find_in_trip(self, stop_id: str, trip_id: str) -> Optional[TripStop]:
        return self.find_one_by_criteria({"id": stop_id, "trip_id": trip_id})
