"""
Database enums shared by models, schemas and query parameters.
"""

import enum


class ActivityCategory(str, enum.Enum):
    """Activity catalog category."""
    SIGHTSEEING = "sightseeing"
    FOOD = "food"
    ADVENTURE = "adventure"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    CULTURE = "culture"
    NATURE = "nature"
    SPORTS = "sports"
    NIGHTLIFE = "nightlife"
    RELAXATION = "relaxation"


class CitySortField(str, enum.Enum):
    """Sortable city columns."""
    NAME = "name"
    COUNTRY = "country"
    POPULARITY = "popularity"
    COST_INDEX = "cost_index"
    CREATED_AT = "created_at"


class SortOrder(str, enum.Enum):
    """Sort direction."""
    ASC = "asc"
    DESC = "desc"
