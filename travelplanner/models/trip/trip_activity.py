"""
Trip activity model: a catalog activity scheduled on a stop.
"""

from datetime import date as Date, time as Time
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Date as SQLDate,
    ForeignKey,
    Index,
    Numeric,
    Time as SQLTime,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travelplanner.models.base.base_model import TimestampModel

if TYPE_CHECKING:
    from travelplanner.models.location.activity import Activity
    from travelplanner.models.trip.trip_stop import TripStop

__all__ = ["TripActivity"]


class TripActivity(TimestampModel):
    """
    Scheduled activity with optional per-booking cost overrides.
    """

    __tablename__ = "trip_activities"

    trip_stop_id: Mapped[str] = mapped_column(
        ForeignKey("trip_stops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    activity_id: Mapped[str] = mapped_column(
        ForeignKey("activities.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    time: Mapped[Optional[Time]] = mapped_column(SQLTime, nullable=True)
    min_cost_override: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    max_cost_override: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    trip_stop: Mapped["TripStop"] = relationship("TripStop", back_populates="trip_activities")
    activity: Mapped["Activity"] = relationship("Activity", lazy="joined")

    __table_args__ = (
        UniqueConstraint(
            "trip_stop_id",
            "activity_id",
            "date",
            "time",
            name="uq_trip_activity_slot",
        ),
        # NULLs are distinct under uq_trip_activity_slot
        Index(
            "uq_trip_activity_unscheduled_slot",
            "trip_stop_id",
            "activity_id",
            "date",
            unique=True,
            sqlite_where=text("time IS NULL"),
            postgresql_where=text("time IS NULL"),
        ),
    )
