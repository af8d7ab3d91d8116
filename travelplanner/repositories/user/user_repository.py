"""
User repository.
"""

from typing import Optional

from sqlalchemy.orm import Session

from travelplanner.models.user.user import User
from travelplanner.repositories.base.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Read access to traveler profiles."""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def find_country(self, user_id: str) -> Optional[str]:
        """Home country of the user, None when the user is unknown."""
        user = self.find_by_id(user_id)
        return user.country if user is not None else None
