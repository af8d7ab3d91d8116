"""Trip itinerary models package."""

from travelplanner.models.trip.trip import Trip
from travelplanner.models.trip.trip_activity import TripActivity
from travelplanner.models.trip.trip_stop import TripStop

__all__ = ["Trip", "TripStop", "TripActivity"]
