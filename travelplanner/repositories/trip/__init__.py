"""Trip itinerary repositories."""

from travelplanner.repositories.trip.trip_activity_repository import TripActivityRepository
from travelplanner.repositories.trip.trip_repository import TripRepository
from travelplanner.repositories.trip.trip_stop_repository import TripStopRepository

__all__ = ["TripRepository", "TripStopRepository", "TripActivityRepository"]
