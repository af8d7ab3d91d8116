"""User models package."""

from travelplanner.models.user.user import User

__all__ = ["User"]
