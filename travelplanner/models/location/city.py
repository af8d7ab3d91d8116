"""
City catalog model.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Index, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from travelplanner.models.base.base_model import TimestampModel

if TYPE_CHECKING:
    from travelplanner.models.location.activity import Activity

__all__ = ["City"]


class City(TimestampModel):
    """
    Destination city.

    Attributes:
        name: City name
        country: Country the city belongs to
        cost_index: Relative price level
        popularity: Recommendation weight
    """

    __tablename__ = "cities"

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    country: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    cost_index: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(6, 2),
        nullable=True,
        comment="Relative price level",
    )
    popularity: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Recommendation weight",
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    activities: Mapped[List["Activity"]] = relationship(
        "Activity",
        back_populates="city",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("name", "country", name="uq_city_name_country"),
        Index("idx_city_country_name", "country", "name"),
    )
