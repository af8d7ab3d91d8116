# travelplanner/db/init_db.py
"""Database initialization utilities."""
import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from travelplanner.db.session import engine as default_engine
from travelplanner.models import Base

logger = logging.getLogger(__name__)


def init_db(bind: Engine = None) -> None:
    """
    Create all tables that do not exist yet.

    Note: This is suitable for development/testing only.
    For production, use migrations instead.
    """
    bind = bind or default_engine
    try:
        existing_tables = inspect(bind).get_table_names()
        Base.metadata.create_all(bind=bind)
        logger.info(
            "Database tables ensured",
            extra={"existing_tables": len(existing_tables)},
        )
    except Exception:
        logger.exception("Error initializing database")
        raise


def drop_db(bind: Engine = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Use with caution.
    """
    bind = bind or default_engine
    Base.metadata.drop_all(bind=bind)
    logger.warning("All database tables dropped")
