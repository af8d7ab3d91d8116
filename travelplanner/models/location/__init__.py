"""Location catalog models package."""

from travelplanner.models.location.activity import Activity
from travelplanner.models.location.city import City

__all__ = ["City", "Activity"]
