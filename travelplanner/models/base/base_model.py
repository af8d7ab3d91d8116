# --- File: travelplanner/models/base/base_model.py ---
"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and the abstract model every
persisted entity derives from.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import DeclarativeBase

from travelplanner.models.base.mixins import TimestampMixin, UUIDMixin


class Base(DeclarativeBase):
    """Root SQLAlchemy base class."""
    pass


class BaseModel(UUIDMixin, Base):
    """
    Abstract base model with a UUID primary key.
    """

    __abstract__ = True

    def to_dict(self, exclude: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Convert model instance to dictionary.

        Args:
            exclude: List of field names to exclude

        Returns:
            Dictionary representation of the model
        """
        exclude = exclude or []
        result = {}

        for column in self.__table__.columns:
            if column.name in exclude:
                continue
            value = getattr(self, column.name)

            if isinstance(value, (datetime, date)):
                result[column.name] = value.isoformat()
            elif isinstance(value, Decimal):
                result[column.name] = str(value)
            else:
                result[column.name] = value

        return result

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"


class TimestampModel(TimestampMixin, BaseModel):
    """
    Base model with automatic timestamp tracking.
    """

    __abstract__ = True
