"""
City catalog repository.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from travelplanner.core.exceptions import RepositoryError
from travelplanner.models.base.enums import CitySortField, SortOrder
from travelplanner.models.location.city import City
from travelplanner.repositories.base.base_repository import BaseRepository


class CityRepository(BaseRepository[City]):
    """
    Repository for cities.

    Provides:
    - Distinct country listing
    - Filtered, sorted and paginated city search
    - Popular city ranking
    """

    def __init__(self, db: Session):
        super().__init__(City, db)

    def find_countries(self, search: Optional[str] = None) -> List[str]:
        """Distinct countries in ascending order, optionally filtered by substring."""
        stmt = select(City.country).group_by(City.country).order_by(City.country.asc())
        if search:
            stmt = stmt.where(City.country.ilike(f"%{search}%"))
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to list countries", table=self.table_name) from e

    def search_cities(
        self,
        country: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: CitySortField = CitySortField.NAME,
        sort_order: SortOrder = SortOrder.ASC,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[City], int]:
        """
        Cities matching the filters and the total count before paging.

        ``search`` matches the city name or the country.
        """
        conditions = []
        if country:
            conditions.append(City.country == country)
        if search:
            pattern = f"%{search}%"
            conditions.append(or_(City.name.ilike(pattern), City.country.ilike(pattern)))

        column = getattr(City, sort_by.value)
        ordering = column.desc() if sort_order == SortOrder.DESC else column.asc()

        stmt = (
            select(City)
            .where(*conditions)
            .order_by(ordering, City.id.asc())
            .offset(offset)
            .limit(limit)
        )
        count_stmt = select(func.count()).select_from(City).where(*conditions)

        try:
            cities = list(self.db.execute(stmt).scalars().all())
            total = int(self.db.execute(count_stmt).scalar_one())
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to search cities", table=self.table_name) from e
        return cities, total

    def find_popular(self, limit: int, country: Optional[str] = None) -> List[City]:
        """Cities with a popularity score, most popular first."""
        stmt = select(City).where(City.popularity.is_not(None))
        if country:
            stmt = stmt.where(City.country == country)
        stmt = stmt.order_by(City.popularity.desc(), City.name.asc()).limit(limit)
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError("Failed to list popular cities", table=self.table_name) from e
