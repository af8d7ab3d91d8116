"""
Trip query service: owner listings and single-trip reads with metrics.
"""

from typing import Any, Optional

from sqlalchemy.orm import Session

from travelplanner.config import settings
from travelplanner.core.exceptions import TripNotFoundError
from travelplanner.core.pagination import build_pagination_meta, normalize_pagination
from travelplanner.models.trip.trip import Trip
from travelplanner.repositories.trip.trip_repository import TripRepository
from travelplanner.schemas.common.pagination import PaginationParams
from travelplanner.schemas.trip import (
    TripListResponse,
    TripWithMetrics,
    UpcomingTripListResponse,
)
from travelplanner.services.base.base_service import BaseService, Clock
from travelplanner.services.base.service_result import ServiceResult
from travelplanner.services.trip.trip_metrics import add_countdown, calculate_trip_metrics


def paginate(page: Any, limit: Any) -> PaginationParams:
    """Clamp raw page/limit values using the configured page sizes."""
    return normalize_pagination(
        page,
        limit,
        default_limit=settings.api.DEFAULT_PAGE_SIZE,
        max_limit=settings.api.MAX_PAGE_SIZE,
    )


class TripQueryService(BaseService[Trip, TripRepository]):
    """
    Read-side trip operations for the authenticated requester.

    Every trip returned is annotated with metrics; upcoming trips also
    carry a countdown relative to the injected clock.
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(TripRepository(db_session), db_session, clock)

    def get_previous_trips(
        self,
        requester_id: str,
        page: Any = None,
        limit: Any = None,
    ) -> ServiceResult[TripListResponse]:
        """
        Requester's trips, most recently ended first.

        Ongoing and future trips are included; "previous" only names the
        ordering.
        """
        try:
            params = paginate(page, limit)
            trips = self.repository.find_previous_trips(requester_id, params.limit, params.offset)
            total = self.repository.count_previous_trips(requester_id)

            return ServiceResult.success(
                TripListResponse(
                    trips=[calculate_trip_metrics(trip, requester_id) for trip in trips],
                    pagination=build_pagination_meta(params, total),
                )
            )
        except Exception as e:
            return self._handle_exception(e, "fetch previous trips", requester_id)

    def get_upcoming_trips(
        self,
        requester_id: str,
        page: Any = None,
        limit: Any = None,
    ) -> ServiceResult[UpcomingTripListResponse]:
        """Requester's trips starting after today, soonest first."""
        try:
            params = paginate(page, limit)
            now = self.now()
            today = now.date()

            trips = self.repository.find_upcoming_trips(requester_id, today, params.limit, params.offset)
            total = self.repository.count_upcoming_trips(requester_id, today)

            return ServiceResult.success(
                UpcomingTripListResponse(
                    trips=[add_countdown(trip, now, requester_id) for trip in trips],
                    pagination=build_pagination_meta(params, total),
                )
            )
        except Exception as e:
            return self._handle_exception(e, "fetch upcoming trips", requester_id)

    def get_trip_by_id(self, trip_id: str, requester_id: str) -> ServiceResult[TripWithMetrics]:
        """
        One trip with full details.

        Missing trips and other users' private trips are both reported as
        not found with the same message.
        """
        try:
            trip = self.repository.find_by_id_with_details(trip_id, requester_id)
            if trip is None:
                raise TripNotFoundError()
            return ServiceResult.success(calculate_trip_metrics(trip, requester_id))
        except Exception as e:
            return self._handle_exception(e, "fetch trip details", requester_id, trip_id)
