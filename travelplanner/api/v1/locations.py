"""
Location catalog endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from travelplanner.api import deps
from travelplanner.models.base.enums import ActivityCategory
from travelplanner.schemas.common.response import SuccessResponse
from travelplanner.schemas.location import (
    CityActivitiesResponse,
    CityListResponse,
    CityOut,
    CountryListResponse,
    PopularCitiesResponse,
)
from travelplanner.services.location.location_service import LocationService

router = APIRouter(
    prefix="/locations",
    tags=["Locations"],
    dependencies=[Depends(deps.get_current_user_id)],
)


@router.get("/countries", response_model=SuccessResponse[CountryListResponse])
def list_countries(
    search: Optional[str] = Query(None),
    service: LocationService = Depends(deps.get_location_service),
):
    return SuccessResponse.create(deps.unwrap_result(service.get_countries(search)))


@router.get("/cities", response_model=SuccessResponse[CityListResponse])
def list_cities(
    country: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, description="name, country, popularity, cost_index, created_at"),
    sort_order: Optional[str] = Query(None, description="asc or desc"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: LocationService = Depends(deps.get_location_service),
):
    result = service.get_cities(country, search, sort_by, sort_order, page, limit)
    return SuccessResponse.create(deps.unwrap_result(result))


@router.get("/cities/popular", response_model=SuccessResponse[PopularCitiesResponse])
def popular_cities(
    limit: Optional[str] = Query(None),
    country: Optional[str] = Query(None),
    service: LocationService = Depends(deps.get_location_service),
):
    return SuccessResponse.create(deps.unwrap_result(service.get_popular_cities(limit, country)))


@router.get("/cities/{city_id}", response_model=SuccessResponse[CityOut])
def city_details(
    city_id: str,
    service: LocationService = Depends(deps.get_location_service),
):
    return SuccessResponse.create(deps.unwrap_result(service.get_city(city_id)))


@router.get("/cities/{city_id}/activities", response_model=SuccessResponse[CityActivitiesResponse])
def city_activities(
    city_id: str,
    category: Optional[ActivityCategory] = Query(None),
    service: LocationService = Depends(deps.get_location_service),
):
    return SuccessResponse.create(deps.unwrap_result(service.get_city_activities(city_id, category)))
