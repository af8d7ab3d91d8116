"""
Trip endpoints: listings, details, itinerary writes and suggestions.

Static paths (previous, upcoming, regional-selections) are declared before
``/{trip_id}`` so they are never captured as ids.
"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from travelplanner.api import deps
from travelplanner.core.exceptions import ErrorCode, ValidationError
from travelplanner.models.base.enums import ActivityCategory
from travelplanner.schemas.common.response import MessageResponse, SuccessResponse
from travelplanner.schemas.trip import (
    RegionalTripListResponse,
    SuggestedActivitiesResponse,
    TripActivityCreate,
    TripActivityOut,
    TripCreate,
    TripListResponse,
    TripStopCreate,
    TripStopOut,
    TripWithMetrics,
    UpcomingTripListResponse,
)
from travelplanner.services.location.location_service import LocationService
from travelplanner.services.trip.regional_selection_service import RegionalSelectionService
from travelplanner.services.trip.trip_itinerary_service import TripItineraryService
from travelplanner.services.trip.trip_query_service import TripQueryService

router = APIRouter(prefix="/trips", tags=["Trips"])


# --- Listings ------------------------------------------------------------------

@router.get("/previous", response_model=SuccessResponse[TripListResponse])
def previous_trips(
    page: Optional[str] = Query(None, description="Page number (clamped)"),
    limit: Optional[str] = Query(None, description="Page size (clamped)"),
    requester_id: str = Depends(deps.get_current_user_id),
    service: TripQueryService = Depends(deps.get_trip_query_service),
):
    data = deps.unwrap_result(service.get_previous_trips(requester_id, page, limit))
    return SuccessResponse.create(data)


@router.get("/upcoming", response_model=SuccessResponse[UpcomingTripListResponse])
def upcoming_trips(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    requester_id: str = Depends(deps.get_current_user_id),
    service: TripQueryService = Depends(deps.get_trip_query_service),
):
    data = deps.unwrap_result(service.get_upcoming_trips(requester_id, page, limit))
    return SuccessResponse.create(data)


@router.get("/regional-selections", response_model=SuccessResponse[RegionalTripListResponse])
def regional_selections(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    requester_id: str = Depends(deps.get_current_user_id),
    service: RegionalSelectionService = Depends(deps.get_regional_selection_service),
):
    data = deps.unwrap_result(service.get_regional_selections(requester_id, page, limit))
    return SuccessResponse.create(data)


# --- Trips ---------------------------------------------------------------------

@router.post(
    "",
    response_model=SuccessResponse[TripWithMetrics],
    status_code=status.HTTP_201_CREATED,
)
def create_trip(
    payload: TripCreate,
    requester_id: str = Depends(deps.get_current_user_id),
    service: TripItineraryService = Depends(deps.get_itinerary_service),
):
    result = service.create_trip(requester_id, payload)
    return SuccessResponse.create(deps.unwrap_result(result), result.message)


@router.get(
    "/{trip_id}/suggested-activities",
    response_model=SuccessResponse[SuggestedActivitiesResponse],
)
def suggested_activities(
    trip_id: str,
    city_id: Optional[str] = Query(None),
    category: Optional[ActivityCategory] = Query(None),
    min_cost: Optional[Decimal] = Query(None, ge=0),
    max_cost: Optional[Decimal] = Query(None, ge=0),
    limit: Optional[str] = Query(None),
    requester_id: str = Depends(deps.get_current_user_id),
    service: LocationService = Depends(deps.get_location_service),
):
    if not city_id:
        raise ValidationError(
            "city_id is required",
            field_errors={"city_id": ["Field required"]},
            error_code=ErrorCode.INVALID_REQUEST,
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    data = deps.unwrap_result(
        service.get_suggested_activities(
            trip_id,
            requester_id,
            city_id,
            category=category,
            min_cost=min_cost,
            max_cost=max_cost,
            limit=limit,
        )
    )
    return SuccessResponse.create(data)


@router.get("/{trip_id}", response_model=SuccessResponse[TripWithMetrics])
def trip_details(
    trip_id: str,
    requester_id: str = Depends(deps.get_current_user_id),
    service: TripQueryService = Depends(deps.get_trip_query_service),
):
    data = deps.unwrap_result(service.get_trip_by_id(trip_id, requester_id))
    return SuccessResponse.create(data)


@router.delete("/{trip_id}", response_model=MessageResponse)
def delete_trip(
    trip_id: str,
    requester_id: str = Depends(deps.get_current_user_id),
    service: TripItineraryService = Depends(deps.get_itinerary_service),
):
    result = service.delete_trip(requester_id, trip_id)
    deps.unwrap_result(result)
    return MessageResponse.create(result.message)


# --- Stops ---------------------------------------------------------------------

@router.post(
    "/{trip_id}/stops",
    response_model=SuccessResponse[TripStopOut],
    status_code=status.HTTP_201_CREATED,
)
def add_stop(
    trip_id: str,
    payload: TripStopCreate,
    requester_id: str = Depends(deps.get_current_user_id),
    service: TripItineraryService = Depends(deps.get_itinerary_service),
):
    result = service.add_stop(requester_id, trip_id, payload)
    return SuccessResponse.create(deps.unwrap_result(result), result.message)


@router.delete("/{trip_id}/stops/{stop_id}", response_model=MessageResponse)
def remove_stop(
    trip_id: str,
    stop_id: str,
    requester_id: str = Depends(deps.get_current_user_id),
    service: TripItineraryService = Depends(deps.get_itinerary_service),
):
    result = service.remove_stop(requester_id, trip_id, stop_id)
    deps.unwrap_result(result)
    return MessageResponse.create(result.message)


# --- Activities ----------------------------------------------------------------

@router.post(
    "/{trip_id}/stops/{stop_id}/activities",
    response_model=SuccessResponse[TripActivityOut],
    status_code=status.HTTP_201_CREATED,
)
def add_activity(
    trip_id: str,
    stop_id: str,
    payload: TripActivityCreate,
    requester_id: str = Depends(deps.get_current_user_id),
    service: TripItineraryService = Depends(deps.get_itinerary_service),
):
    result = service.add_activity(requester_id, trip_id, stop_id, payload)
    return SuccessResponse.create(deps.unwrap_result(result), result.message)


@router.delete(
    "/{trip_id}/stops/{stop_id}/activities/{trip_activity_id}",
    response_model=MessageResponse,
)
def remove_activity(
    trip_id: str,
    stop_id: str,
    trip_activity_id: str,
    requester_id: str = Depends(deps.get_current_user_id),
    service: TripItineraryService = Depends(deps.get_itinerary_service),
):
    result = service.remove_activity(requester_id, trip_id, stop_id, trip_activity_id)
    deps.unwrap_result(result)
    return MessageResponse.create(result.message)
