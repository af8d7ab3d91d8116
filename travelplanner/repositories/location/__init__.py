"""Location catalog repositories."""

from travelplanner.repositories.location.activity_repository import ActivityRepository
from travelplanner.repositories.location.city_repository import CityRepository

__all__ = ["CityRepository", "ActivityRepository"]
