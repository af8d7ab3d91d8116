"""
Itinerary writer: owner-scoped trip, stop and activity mutations.

Enhanced with:
- Atomic creation of a trip with its nested stops and activities
- Per-trip serialization of stop and activity appends (in-process lock
  plus row lock)
- Date containment checks (stop within trip, activity within stop)
"""

from typing import Optional

from sqlalchemy.orm import Session

from travelplanner.core.exceptions import (
    DuplicateEntryError,
    InvalidDateRangeError,
    ResourceNotFoundError,
    TripNotFoundError,
    ValidationError,
)
from travelplanner.core.locks import KeyedLock
from travelplanner.models.trip.trip import Trip
from travelplanner.models.trip.trip_activity import TripActivity
from travelplanner.models.trip.trip_stop import TripStop
from travelplanner.repositories.location.activity_repository import ActivityRepository
from travelplanner.repositories.location.city_repository import CityRepository
from travelplanner.repositories.trip.trip_activity_repository import TripActivityRepository
from travelplanner.repositories.trip.trip_repository import TripRepository
from travelplanner.repositories.trip.trip_stop_repository import TripStopRepository
from travelplanner.repositories.user.user_repository import UserRepository
from travelplanner.schemas.trip import (
    TripActivityCreate,
    TripActivityOut,
    TripCreate,
    TripStopCreate,
    TripStopOut,
    TripWithMetrics,
)
from travelplanner.services.base.base_service import BaseService, Clock
from travelplanner.services.base.service_result import ServiceResult
from travelplanner.services.trip.trip_metrics import (
    build_stop_out,
    build_trip_activity_out,
    calculate_trip_metrics,
)

# Shared by every service instance in the process
trip_locks = KeyedLock()


class TripItineraryService(BaseService[Trip, TripRepository]):
    """
    Write-side trip operations.

    All mutations require the requester to own the trip; a trip owned by
    someone else is reported exactly like a missing one.
    """

    def __init__(
        self,
        db_session: Session,
        clock: Optional[Clock] = None,
        locks: Optional[KeyedLock] = None,
    ):
        super().__init__(TripRepository(db_session), db_session, clock)
        self.stop_repository = TripStopRepository(db_session)
        self.trip_activity_repository = TripActivityRepository(db_session)
        self.city_repository = CityRepository(db_session)
        self.activity_repository = ActivityRepository(db_session)
        self.user_repository = UserRepository(db_session)
        self._locks = locks or trip_locks

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate_trip_range(payload: TripCreate) -> None:
        if payload.start_date > payload.end_date:
            raise InvalidDateRangeError(
                "End date must not be before start date",
                start_date=payload.start_date,
                end_date=payload.end_date,
            )

    @staticmethod
    def _validate_stop_range(trip: Trip, payload: TripStopCreate) -> None:
        if payload.start_date > payload.end_date:
            raise InvalidDateRangeError(
                "Stop end date must not be before stop start date",
                start_date=payload.start_date,
                end_date=payload.end_date,
            )
        if payload.start_date < trip.start_date or payload.end_date > trip.end_date:
            raise ValidationError(
                "Stop dates must be within trip dates",
                field_errors={"start_date": ["Stop must fall inside the trip range"]},
            )

    @staticmethod
    def _validate_activity_date(stop: TripStop, payload: TripActivityCreate) -> None:
        if payload.date < stop.start_date or payload.date > stop.end_date:
            raise ValidationError(
                "Activity date must be within trip stop dates",
                field_errors={"date": ["Activity must fall inside the stop range"]},
            )

    def _require_owned_trip(self, trip_id: str, owner_id: str) -> Trip:
        trip = self.repository.find_owned(trip_id, owner_id)
        if trip is None:
            raise TripNotFoundError()
        return trip

    def _require_stop(self, stop_id: str, trip_id: str) -> TripStop:
        stop = self.stop_repository.find_in_trip(stop_id, trip_id)
        if stop is None:
            raise ResourceNotFoundError("Trip stop", message="Trip stop not found")
        return stop

    def _require_city(self, city_id: str) -> None:
        if self.city_repository.find_by_id(city_id) is None:
            raise ResourceNotFoundError("City", message="City not found")

    # -------------------------------------------------------------------------
    # Building blocks (run inside a transaction)
    # -------------------------------------------------------------------------

    def _schedule_activity(self, stop: TripStop, payload: TripActivityCreate) -> TripActivity:
        if self.activity_repository.find_by_id(payload.activity_id) is None:
            raise ResourceNotFoundError("Activity", message="Activity not found")
        self._validate_activity_date(stop, payload)

        if stop.id is not None and self.trip_activity_repository.slot_taken(
            stop.id, payload.activity_id, payload.date, payload.time
        ):
            raise DuplicateEntryError(
                "Activity is already scheduled for this slot",
                table=TripActivity.__tablename__,
            )

        item = TripActivity(
            activity_id=payload.activity_id,
            date=payload.date,
            time=payload.time,
            min_cost_override=payload.min_cost_override,
            max_cost_override=payload.max_cost_override,
        )
        stop.trip_activities.append(item)
        return self.trip_activity_repository.create(item)

    def _append_stop(self, trip: Trip, payload: TripStopCreate, order_index: int) -> TripStop:
        self._validate_stop_range(trip, payload)
        self._require_city(payload.city_id)

        stop = TripStop(
            city_id=payload.city_id,
            start_date=payload.start_date,
            end_date=payload.end_date,
            order_index=order_index,
        )
        trip.trip_stops.append(stop)
        self.stop_repository.create(stop)

        for activity_payload in payload.activities:
            self._schedule_activity(stop, activity_payload)
        return stop

    @staticmethod
    def _next_order_index(requested: Optional[int], current_max: int) -> int:
        """
        Explicit indexes must extend the sequence; otherwise append after
        the current last stop.
        """
        if requested is None:
            return current_max + 1
        if requested <= current_max:
            raise ValidationError(
                f"order_index must be greater than {current_max}",
                field_errors={"order_index": [f"Must be greater than {current_max}"]},
            )
        return requested

    # -------------------------------------------------------------------------
    # Trips
    # -------------------------------------------------------------------------

    def create_trip(self, owner_id: str, payload: TripCreate) -> ServiceResult[TripWithMetrics]:
        """
        Create a trip with its stops and activities in one transaction.

        Any failure rolls everything back; no partial trip is ever visible.
        """
        try:
            self._validate_trip_range(payload)
            if self.user_repository.find_by_id(owner_id) is None:
                raise ResourceNotFoundError("User", message="User not found")

            with self.transaction():
                trip = Trip(
                    user_id=owner_id,
                    name=payload.name,
                    description=payload.description,
                    start_date=payload.start_date,
                    end_date=payload.end_date,
                    cover_photo=payload.cover_photo,
                    is_public=payload.is_public,
                )
                self.repository.create(trip)

                order_index = 0
                for stop_payload in payload.stops:
                    order_index = self._next_order_index(stop_payload.order_index, order_index)
                    self._append_stop(trip, stop_payload, order_index)

                trip_id = trip.id

            self._log_operation(
                "create trip",
                owner_id,
                {"trip_id": trip_id, "stops": len(payload.stops)},
            )

            created = self.repository.find_by_id_with_details(trip_id, owner_id)
            return ServiceResult.success(
                calculate_trip_metrics(created, owner_id),
                message="Trip created successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "create trip", owner_id)

    def delete_trip(self, owner_id: str, trip_id: str) -> ServiceResult[bool]:
        """Delete an owned trip together with its stops and activities."""
        try:
            with self.transaction():
                trip = self._require_owned_trip(trip_id, owner_id)
                self.repository.delete(trip)

            self._log_operation("delete trip", owner_id, {"trip_id": trip_id})
            return ServiceResult.success(True, message="Trip deleted successfully")
        except Exception as e:
            return self._handle_exception(e, "delete trip", owner_id, trip_id)

    # -------------------------------------------------------------------------
    # Stops
    # -------------------------------------------------------------------------

    def add_stop(
        self,
        owner_id: str,
        trip_id: str,
        payload: TripStopCreate,
    ) -> ServiceResult[TripStopOut]:
        """
        Append a stop (and its activities) to an owned trip.

        Appends to the same trip are serialized so the next order_index is
        always computed from the committed maximum.
        """
        try:
            with self._locks.hold(trip_id):
                with self.transaction():
                    trip = self.repository.lock_owned_for_update(trip_id, owner_id)
                    if trip is None:
                        raise TripNotFoundError()

                    current_max = self.stop_repository.get_max_order_index(trip_id)
                    order_index = self._next_order_index(payload.order_index, current_max)
                    stop = self._append_stop(trip, payload, order_index)

            self._log_operation(
                "add trip stop",
                owner_id,
                {"trip_id": trip_id, "stop_id": stop.id, "order_index": order_index},
            )
            return ServiceResult.success(build_stop_out(stop), message="Trip stop added successfully")
        except Exception as e:
            return self._handle_exception(e, "add trip stop", owner_id, trip_id)

    def remove_stop(self, owner_id: str, trip_id: str, stop_id: str) -> ServiceResult[bool]:
        """Remove a stop and its scheduled activities."""
        try:
            with self.transaction():
                self._require_owned_trip(trip_id, owner_id)
                stop = self._require_stop(stop_id, trip_id)
                self.stop_repository.delete(stop)

            self._log_operation("remove trip stop", owner_id, {"trip_id": trip_id, "stop_id": stop_id})
            return ServiceResult.success(True, message="Trip stop removed successfully")
        except Exception as e:
            return self._handle_exception(e, "remove trip stop", owner_id, stop_id)

    # -------------------------------------------------------------------------
    # Activities
    # -------------------------------------------------------------------------

    def add_activity(
        self,
        owner_id: str,
        trip_id: str,
        stop_id: str,
        payload: TripActivityCreate,
    ) -> ServiceResult[TripActivityOut]:
        """
        Schedule a catalog activity on a stop of an owned trip.

        Runs under the same per-trip serialization as stop appends so the
        slot check and the insert cannot interleave.
        """
        try:
            with self._locks.hold(trip_id):
                with self.transaction():
                    if self.repository.lock_owned_for_update(trip_id, owner_id) is None:
                        raise TripNotFoundError()
                    stop = self._require_stop(stop_id, trip_id)
                    item = self._schedule_activity(stop, payload)

            self._log_operation(
                "add trip activity",
                owner_id,
                {"trip_id": trip_id, "stop_id": stop_id, "activity_id": payload.activity_id},
            )
            return ServiceResult.success(
                build_trip_activity_out(item),
                message="Trip activity added successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "add trip activity", owner_id, stop_id)

    def remove_activity(
        self,
        owner_id: str,
        trip_id: str,
        stop_id: str,
        trip_activity_id: str,
    ) -> ServiceResult[bool]:
        try:
            with self.transaction():
                self._require_owned_trip(trip_id, owner_id)
                self._require_stop(stop_id, trip_id)
                item = self.trip_activity_repository.find_in_stop(trip_activity_id, stop_id)
                if item is None:
                    raise ResourceNotFoundError("Trip activity", message="Trip activity not found")
                self.trip_activity_repository.delete(item)

            self._log_operation(
                "remove trip activity",
                owner_id,
                {"trip_id": trip_id, "trip_activity_id": trip_activity_id},
            )
            return ServiceResult.success(True, message="Trip activity removed successfully")
        except Exception as e:
            return self._handle_exception(e, "remove trip activity", owner_id, trip_activity_id)
