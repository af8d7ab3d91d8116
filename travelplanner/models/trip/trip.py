"""
Trip model.

A trip is a user-owned itinerary spanning calendar dates and composed of
ordered city stops.
"""

from datetime import date as Date
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date as SQLDate,
    ForeignKey,
    Index,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travelplanner.models.base.base_model import TimestampModel

if TYPE_CHECKING:
    from travelplanner.models.trip.trip_stop import TripStop
    from travelplanner.models.user.user import User

__all__ = ["Trip"]


class Trip(TimestampModel):
    """
    Multi-city trip.

    Attributes:
        user_id: Owner of the trip
        name: Display name
        start_date: First calendar day of the trip
        end_date: Last calendar day of the trip
        is_public: Whether other travelers may read the trip
        cover_photo: Optional cover image URL
    """

    __tablename__ = "trips"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Trip owner",
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_date: Mapped[Date] = mapped_column(SQLDate, nullable=False, index=True)
    end_date: Mapped[Date] = mapped_column(SQLDate, nullable=False, index=True)
    is_public: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )
    cover_photo: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="trips")
    trip_stops: Mapped[List["TripStop"]] = relationship(
        "TripStop",
        back_populates="trip",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TripStop.order_index",
    )

    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_trip_date_range"),
        Index("idx_trip_user_dates", "user_id", "start_date", "end_date"),
        Index("idx_trip_public_end", "is_public", "end_date"),
    )
