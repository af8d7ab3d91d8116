"""Database session management."""
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from travelplanner.config.settings import settings


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on FK enforcement so ON DELETE CASCADE works on SQLite."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str = None, echo: bool = None) -> Engine:
    """
    Create an engine for the configured database.

    SQLite gets a thread-tolerant connection and FK enforcement;
    other backends get the pooled settings.
    """
    url = database_url or settings.database.DATABASE_URL
    echo = settings.database.DB_ECHO if echo is None else echo

    if url.startswith("sqlite"):
        sqlite_engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
        enable_sqlite_foreign_keys(sqlite_engine)
        return sqlite_engine

    return create_engine(
        url,
        pool_pre_ping=True,
        echo=echo,
        pool_size=settings.database.DB_POOL_SIZE,
        max_overflow=settings.database.DB_MAX_OVERFLOW,
        pool_recycle=settings.database.DB_POOL_RECYCLE,
    )


# Create database engine
engine = build_engine()

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/trips/previous")
        def previous_trips(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
