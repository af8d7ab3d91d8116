"""Base repository package."""

from travelplanner.repositories.base.base_repository import BaseRepository, ModelType

__all__ = ["BaseRepository", "ModelType"]
