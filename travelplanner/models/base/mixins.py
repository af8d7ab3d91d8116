# --- File: travelplanner/models/base/mixins.py ---
"""
SQLAlchemy model mixins shared by all entities.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UUIDMixin:
    """
    Mixin for UUID primary key stored as a 36-character string.
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        nullable=False,
        comment="Primary key (UUID)",
    )


class TimestampMixin:
    """
    Mixin for automatic timestamp tracking.

    Values are set on the Python side so ordering by creation time stays
    precise on backends whose server clock has second resolution.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        index=True,
        comment="Record creation timestamp (UTC)",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
        comment="Record last update timestamp (UTC)",
    )
