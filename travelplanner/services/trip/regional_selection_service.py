"""
Regional recommendation selector.

Recommends other travelers' public trips from the requester's home country
that have not ended yet, newest first.
"""

from typing import Any, Optional

from sqlalchemy.orm import Session

from travelplanner.core.exceptions import ResourceNotFoundError
from travelplanner.core.pagination import build_pagination_meta
from travelplanner.models.trip.trip import Trip
from travelplanner.repositories.trip.trip_repository import TripRepository
from travelplanner.repositories.user.user_repository import UserRepository
from travelplanner.schemas.trip import RegionalTripListResponse
from travelplanner.services.base.base_service import BaseService, Clock
from travelplanner.services.base.service_result import ServiceResult
from travelplanner.services.trip.trip_metrics import calculate_trip_metrics
from travelplanner.services.trip.trip_query_service import paginate


class RegionalSelectionService(BaseService[Trip, TripRepository]):
    """
    Selection rules:
    - public trips only
    - owner's country equals the requester's country
    - requester's own trips excluded
    - end_date on or after today
    - ordered by created_at desc, then end_date asc
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(TripRepository(db_session), db_session, clock)
        self.user_repository = UserRepository(db_session)

    def get_regional_selections(
        self,
        requester_id: str,
        page: Any = None,
        limit: Any = None,
    ) -> ServiceResult[RegionalTripListResponse]:
        try:
            country = self.user_repository.find_country(requester_id)
            if country is None:
                raise ResourceNotFoundError("User", message="User not found")

            params = paginate(page, limit)
            today = self.today()

            trips = self.repository.find_regional_selections(
                requester_id, country, today, params.limit, params.offset
            )
            total = self.repository.count_regional_selections(requester_id, country, today)

            self._log_operation(
                "regional selections",
                requester_id,
                {"region": country, "returned": len(trips)},
            )

            return ServiceResult.success(
                RegionalTripListResponse(
                    trips=[calculate_trip_metrics(trip, requester_id) for trip in trips],
                    region=country,
                    pagination=build_pagination_meta(params, total),
                )
            )
        except Exception as e:
            return self._handle_exception(e, "fetch regional selections", requester_id)
