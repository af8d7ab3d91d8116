"""Trip services: queries, calendar, regional selections and itinerary writes."""

from travelplanner.services.trip.calendar_service import CalendarService
from travelplanner.services.trip.regional_selection_service import RegionalSelectionService
from travelplanner.services.trip.trip_itinerary_service import TripItineraryService
from travelplanner.services.trip.trip_query_service import TripQueryService

__all__ = [
    "CalendarService",
    "RegionalSelectionService",
    "TripItineraryService",
    "TripQueryService",
]
