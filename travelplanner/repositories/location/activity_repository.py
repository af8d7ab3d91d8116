"""
Activity catalog repository.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from travelplanner.core.exceptions import RepositoryError
from travelplanner.models.base.enums import ActivityCategory
from travelplanner.models.location.activity import Activity
from travelplanner.repositories.base.base_repository import BaseRepository


class ActivityRepository(BaseRepository[Activity]):
    """Repository for city-scoped activities."""

    def __init__(self, db: Session):
        super().__init__(Activity, db)

    def find_for_city(
        self,
        city_id: str,
        category: Optional[ActivityCategory] = None,
        min_cost: Optional[Decimal] = None,
        max_cost: Optional[Decimal] = None,
        limit: Optional[int] = None,
    ) -> List[Activity]:
        """
        Activities of a city ordered by name.

        With a cost window, an activity matches when its own range can
        overlap the window; a missing bound on the activity never excludes it.
        """
        stmt = select(Activity).where(Activity.city_id == city_id)

        if category is not None:
            stmt = stmt.where(Activity.category == category)

        if min_cost is not None or max_cost is not None:
            conditions = []
            if max_cost is not None:
                conditions.append(or_(Activity.min_cost.is_(None), Activity.min_cost <= max_cost))
            if min_cost is not None:
                conditions.append(or_(Activity.max_cost.is_(None), Activity.max_cost >= min_cost))
            stmt = stmt.where(and_(*conditions))

        stmt = stmt.order_by(Activity.name.asc(), Activity.id.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to list activities", table=self.table_name) from e
