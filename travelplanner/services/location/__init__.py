"""Location catalog services."""

from travelplanner.services.location.location_service import LocationService

__all__ = ["LocationService"]
