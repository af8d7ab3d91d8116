"""
Location catalog schemas: cities, activities and listing payloads.
"""

from decimal import Decimal
from typing import List, Union

from pydantic import Field

from travelplanner.models.base.enums import ActivityCategory
from travelplanner.schemas.common.base import BaseDBSchema, BaseSchema
from travelplanner.schemas.common.pagination import PaginationMeta

__all__ = [
    "CityOut",
    "CitySummary",
    "ActivityOut",
    "CountryListResponse",
    "CityListResponse",
    "PopularCitiesResponse",
    "CityActivitiesResponse",
]


class CitySummary(BaseDBSchema):
    """Minimal city reference."""

    name: str = Field(..., description="City name")
    country: str = Field(..., description="Country name")


class CityOut(CitySummary):
    """City catalog entry."""

    cost_index: Union[Decimal, None] = Field(None, description="Relative price level")
    popularity: Union[int, None] = Field(None, description="Recommendation weight")
    description: Union[str, None] = Field(None, description="City description")
    image_url: Union[str, None] = Field(None, description="Image URL")


class ActivityOut(BaseDBSchema):
    """Activity catalog entry."""

    city_id: str = Field(..., description="City the activity belongs to")
    name: str = Field(..., description="Activity name")
    description: Union[str, None] = Field(None, description="Activity description")
    category: ActivityCategory = Field(..., description="Activity category")
    min_cost: Union[Decimal, None] = Field(None, description="Base minimum cost")
    max_cost: Union[Decimal, None] = Field(None, description="Base maximum cost")
    duration: Union[int, None] = Field(None, description="Typical duration in minutes")
    image_url: Union[str, None] = Field(None, description="Image URL")


class CountryListResponse(BaseSchema):
    countries: List[str]
    total: int = Field(..., ge=0)


class CityListResponse(BaseSchema):
    cities: List[CityOut]
    pagination: PaginationMeta


class PopularCitiesResponse(BaseSchema):
    cities: List[CityOut]
    total: int = Field(..., ge=0)


class CityActivitiesResponse(BaseSchema):
    city: CitySummary
    activities: List[ActivityOut]
    total: int = Field(..., ge=0)
