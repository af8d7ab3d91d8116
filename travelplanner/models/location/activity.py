"""
Activity catalog model.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travelplanner.models.base.base_model import TimestampModel
from travelplanner.models.base.enums import ActivityCategory

if TYPE_CHECKING:
    from travelplanner.models.location.city import City

__all__ = ["Activity"]


class Activity(TimestampModel):
    """
    City-scoped activity with an optional base cost range.
    """

    __tablename__ = "activities"

    city_id: Mapped[str] = mapped_column(
        ForeignKey("cities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[ActivityCategory] = mapped_column(
        Enum(
            ActivityCategory,
            name="activity_category",
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        index=True,
    )
    min_cost: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    max_cost: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    duration: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Typical duration in minutes",
    )
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    city: Mapped["City"] = relationship("City", back_populates="activities")

    __table_args__ = (
        CheckConstraint("min_cost IS NULL OR min_cost >= 0", name="ck_activity_min_cost"),
        CheckConstraint("max_cost IS NULL OR max_cost >= 0", name="ck_activity_max_cost"),
    )
