"""
Location catalog service: countries, cities, activities and trip
activity suggestions.
"""

from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.orm import Session

from travelplanner.core.constants import CITY_PAGE_SIZE, POPULAR_CITIES_LIMIT, SUGGESTION_LIMIT
from travelplanner.core.exceptions import ResourceNotFoundError, TripNotFoundError
from travelplanner.core.pagination import build_pagination_meta, normalize_pagination
from travelplanner.config import settings
from travelplanner.models.base.enums import ActivityCategory, CitySortField, SortOrder
from travelplanner.models.location.city import City
from travelplanner.repositories.location.activity_repository import ActivityRepository
from travelplanner.repositories.location.city_repository import CityRepository
from travelplanner.repositories.trip.trip_repository import TripRepository
from travelplanner.schemas.location import (
    ActivityOut,
    CityActivitiesResponse,
    CityListResponse,
    CityOut,
    CitySummary,
    CountryListResponse,
    PopularCitiesResponse,
)
from travelplanner.schemas.trip import SuggestedActivitiesResponse, SuggestionFilters
from travelplanner.services.base.base_service import BaseService, Clock
from travelplanner.services.base.service_result import ServiceResult


def parse_sort_field(value: Optional[str]) -> CitySortField:
    """Unknown sort fields fall back to ``name``."""
    try:
        return CitySortField((value or "").strip().lower())
    except ValueError:
        return CitySortField.NAME


def parse_sort_order(value: Optional[str]) -> SortOrder:
    """Unknown sort orders fall back to ascending."""
    try:
        return SortOrder((value or "").strip().lower())
    except ValueError:
        return SortOrder.ASC


class LocationService(BaseService[City, CityRepository]):
    """Read-only browsing of the city and activity catalog."""

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(CityRepository(db_session), db_session, clock)
        self.activity_repository = ActivityRepository(db_session)
        self.trip_repository = TripRepository(db_session)

    def _require_city(self, city_id: str) -> City:
        city = self.repository.find_by_id(city_id)
        if city is None:
            raise ResourceNotFoundError("City", message="City not found")
        return city

    def get_countries(self, search: Optional[str] = None) -> ServiceResult[CountryListResponse]:
        try:
            countries = self.repository.find_countries(search)
            return ServiceResult.success(CountryListResponse(countries=countries, total=len(countries)))
        except Exception as e:
            return self._handle_exception(e, "fetch countries")

    def get_cities(
        self,
        country: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
    ) -> ServiceResult[CityListResponse]:
        """Filtered city listing; invalid sort values fall back to name/asc."""
        try:
            params = normalize_pagination(
                page,
                limit,
                default_limit=CITY_PAGE_SIZE,
                max_limit=settings.api.MAX_PAGE_SIZE,
            )
            cities, total = self.repository.search_cities(
                country=country,
                search=search,
                sort_by=parse_sort_field(sort_by),
                sort_order=parse_sort_order(sort_order),
                limit=params.limit,
                offset=params.offset,
            )
            return ServiceResult.success(
                CityListResponse(
                    cities=[CityOut.model_validate(city) for city in cities],
                    pagination=build_pagination_meta(params, total),
                )
            )
        except Exception as e:
            return self._handle_exception(e, "fetch cities")

    def get_popular_cities(
        self,
        limit: Any = None,
        country: Optional[str] = None,
    ) -> ServiceResult[PopularCitiesResponse]:
        try:
            params = normalize_pagination(
                1, limit, default_limit=POPULAR_CITIES_LIMIT, max_limit=settings.api.MAX_PAGE_SIZE
            )
            cities = self.repository.find_popular(params.limit, country)
            return ServiceResult.success(
                PopularCitiesResponse(
                    cities=[CityOut.model_validate(city) for city in cities],
                    total=len(cities),
                )
            )
        except Exception as e:
            return self._handle_exception(e, "fetch popular cities")

    def get_city(self, city_id: str) -> ServiceResult[CityOut]:
        try:
            return ServiceResult.success(CityOut.model_validate(self._require_city(city_id)))
        except Exception as e:
            return self._handle_exception(e, "fetch city", entity_ref=city_id)

    def get_city_activities(
        self,
        city_id: str,
        category: Optional[ActivityCategory] = None,
    ) -> ServiceResult[CityActivitiesResponse]:
        try:
            city = self._require_city(city_id)
            activities = self.activity_repository.find_for_city(city_id, category=category)
            return ServiceResult.success(
                CityActivitiesResponse(
                    city=CitySummary.model_validate(city),
                    activities=[ActivityOut.model_validate(item) for item in activities],
                    total=len(activities),
                )
            )
        except Exception as e:
            return self._handle_exception(e, "fetch city activities", entity_ref=city_id)

    def get_suggested_activities(
        self,
        trip_id: str,
        requester_id: str,
        city_id: str,
        category: Optional[ActivityCategory] = None,
        min_cost: Optional[Decimal] = None,
        max_cost: Optional[Decimal] = None,
        limit: Any = None,
    ) -> ServiceResult[SuggestedActivitiesResponse]:
        """
        Catalog activities of a city that could be added to a visible trip.

        With a cost window, activities whose own range can overlap the
        window are kept.
        """
        try:
            if self.trip_repository.find_by_id_with_details(trip_id, requester_id) is None:
                raise TripNotFoundError()

            city = self._require_city(city_id)
            params = normalize_pagination(
                1, limit, default_limit=SUGGESTION_LIMIT, max_limit=settings.api.MAX_PAGE_SIZE
            )
            activities = self.activity_repository.find_for_city(
                city_id,
                category=category,
                min_cost=min_cost,
                max_cost=max_cost,
                limit=params.limit,
            )

            return ServiceResult.success(
                SuggestedActivitiesResponse(
                    city=CitySummary.model_validate(city),
                    suggestions=[ActivityOut.model_validate(item) for item in activities],
                    filters=SuggestionFilters(
                        category=category,
                        min_cost=min_cost,
                        max_cost=max_cost,
                        limit=params.limit,
                    ),
                    total=len(activities),
                )
            )
        except Exception as e:
            return self._handle_exception(e, "fetch suggested activities", requester_id, trip_id)
