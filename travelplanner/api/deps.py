"""
Shared FastAPI dependencies.

Example usage in a router:
    @router.get("/previous")
    def previous_trips(
        requester_id: str = Depends(deps.get_current_user_id),
        service: TripQueryService = Depends(deps.get_trip_query_service),
    ):
        ...
"""

from typing import Dict, Optional, Type, TypeVar

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from travelplanner.core.exceptions import (
    AuthenticationError,
    BaseAppException,
    DatabaseError,
    DuplicateEntryError,
    InternalServerError,
    InvalidDateRangeError,
    ResourceNotFoundError,
    ValidationError,
)
from travelplanner.core.logging import user_id as user_id_context
from travelplanner.core.security.jwt_handler import JWTManager
from travelplanner.db.session import get_db
from travelplanner.models.base.mixins import utc_now
from travelplanner.services.base.base_service import Clock
from travelplanner.services.base.service_result import ErrorCode, ServiceResult
from travelplanner.services.location.location_service import LocationService
from travelplanner.services.trip.calendar_service import CalendarService
from travelplanner.services.trip.regional_selection_service import RegionalSelectionService
from travelplanner.services.trip.trip_itinerary_service import TripItineraryService
from travelplanner.services.trip.trip_query_service import TripQueryService

T = TypeVar("T")

_bearer = HTTPBearer(auto_error=False)
_jwt_manager: Optional[JWTManager] = None


# --- Authentication ------------------------------------------------------------

def get_jwt_manager() -> JWTManager:
    global _jwt_manager
    if _jwt_manager is None:
        _jwt_manager = JWTManager()
    return _jwt_manager


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> str:
    """Authenticated requester id; rejects before any query runs."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    requester_id = jwt_manager.get_user_id(credentials.credentials)
    user_id_context.set(requester_id)
    return requester_id


# --- Clock & services ----------------------------------------------------------

def get_clock() -> Clock:
    return utc_now


def get_trip_query_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> TripQueryService:
    return TripQueryService(db, clock)


def get_regional_selection_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> RegionalSelectionService:
    return RegionalSelectionService(db, clock)


def get_calendar_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> CalendarService:
    return CalendarService(db, clock)


def get_itinerary_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> TripItineraryService:
    return TripItineraryService(db, clock)


def get_location_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> LocationService:
    return LocationService(db, clock)


# --- Result unwrapping ---------------------------------------------------------

_SERVICE_ERRORS: Dict[ErrorCode, Type[BaseAppException]] = {
    ErrorCode.NOT_FOUND: ResourceNotFoundError,
    ErrorCode.VALIDATION_ERROR: ValidationError,
    ErrorCode.INVALID_DATE_RANGE: InvalidDateRangeError,
    ErrorCode.CONFLICT: DuplicateEntryError,
    ErrorCode.UNAUTHORIZED: AuthenticationError,
    ErrorCode.DATABASE_ERROR: DatabaseError,
    ErrorCode.INTERNAL_ERROR: InternalServerError,
}


def unwrap_result(result: ServiceResult[T]) -> T:
    """
    Return the data of a successful result or raise the application
    exception matching its error code.
    """
    if result.is_success:
        return result.data

    error = result.error
    exc_class = _SERVICE_ERRORS.get(error.code, InternalServerError)
    if exc_class is ResourceNotFoundError:
        exc = ResourceNotFoundError(message=error.message)
    elif exc_class is DatabaseError:
        exc = DatabaseError(error.message)
    else:
        exc = exc_class(error.message)
    exc.details = error.details or {}
    raise exc


__all__ = [
    "get_db",
    "get_jwt_manager",
    "get_current_user_id",
    "get_clock",
    "get_trip_query_service",
    "get_regional_selection_service",
    "get_calendar_service",
    "get_itinerary_service",
    "get_location_service",
    "unwrap_result",
]
