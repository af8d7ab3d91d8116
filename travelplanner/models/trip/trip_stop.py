"""
Trip stop model: a city visit inside a trip.
"""

from datetime import date as Date
from typing import TYPE_CHECKING, List

from sqlalchemy import (
    CheckConstraint,
    Date as SQLDate,
    ForeignKey,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travelplanner.models.base.base_model import TimestampModel

if TYPE_CHECKING:
    from travelplanner.models.location.city import City
    from travelplanner.models.trip.trip import Trip
    from travelplanner.models.trip.trip_activity import TripActivity

__all__ = ["TripStop"]


class TripStop(TimestampModel):
    """
    Ordered stop within a trip.

    order_index is unique per trip and grows with the stop sequence.
    """

    __tablename__ = "trip_stops"

    trip_id: Mapped[str] = mapped_column(
        ForeignKey("trips.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    city_id: Mapped[str] = mapped_column(
        ForeignKey("cities.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    end_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)

    trip: Mapped["Trip"] = relationship("Trip", back_populates="trip_stops")
    city: Mapped["City"] = relationship("City", lazy="joined")
    trip_activities: Mapped[List["TripActivity"]] = relationship(
        "TripActivity",
        back_populates="trip_stop",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[TripActivity.date, TripActivity.time.asc().nulls_first()]",
    )

    __table_args__ = (
        UniqueConstraint("trip_id", "order_index", name="uq_trip_stop_order"),
        CheckConstraint("start_date <= end_date", name="ck_trip_stop_date_range"),
        CheckConstraint("order_index >= 0", name="ck_trip_stop_order_positive"),
    )
