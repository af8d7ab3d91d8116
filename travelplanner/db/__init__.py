"""Database engine, session factory and initialization."""

from travelplanner.db.session import SessionLocal, build_engine, engine, get_db

__all__ = ["SessionLocal", "build_engine", "engine", "get_db"]
