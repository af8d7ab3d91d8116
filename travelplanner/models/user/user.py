"""
User model.

Only the profile fields the itinerary engine reads are modelled here;
credentials live with the external auth service.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travelplanner.models.base.base_model import TimestampModel

if TYPE_CHECKING:
    from travelplanner.models.trip.trip import Trip

__all__ = ["User"]


class User(TimestampModel):
    """
    Traveler profile.

    Attributes:
        username: Unique handle
        email: Unique email address
        country: Home country, used for regional recommendations
        city: Home city
    """

    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    country: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Home country",
    )
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    trips: Mapped[List["Trip"]] = relationship(
        "Trip",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
