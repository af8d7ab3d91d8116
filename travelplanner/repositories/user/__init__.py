"""User repositories."""

from travelplanner.repositories.user.user_repository import UserRepository

__all__ = ["UserRepository"]
