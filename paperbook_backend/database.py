from typing import Generator, Callable
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool
import sqlalchemy.exc as sa_exc

from paperbook_backend.settings import settings


def build_engine(database_url: str) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database.

    PostgreSQL gets a tuned QueuePool; SQLite (local development, tests)
    runs with the dialect defaults.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            future=True
        )

    return create_engine(
        database_url,
        poolclass=QueuePool,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        pool_recycle=1800,     # 30 min - protects against idle disconnects
        pool_pre_ping=True,    # avoids stale connections
        pool_use_lifo=True,
        future=True
    )


_engine = build_engine(settings.DATABASE_URL)

SessionLocal: Callable[[], Session] = sessionmaker(
    bind=_engine,
    autocommit=False,
    expire_on_commit=False,  # more convenient with Pydantic
    autoflush=False,         # prevents "accidental" DB touching
    class_=Session
)


def get_engine() -> Engine:
    return _engine


def _get_db() -> Generator[Session, None, None]:
    """
    Internal database session generator with transaction management.

    Handles:
    - Session creation and cleanup
    - Automatic commit on success
    - Rollback on exceptions

    Yields:
        Database session
    """
    db = SessionLocal()
    try:
        yield db

        # Only commit if we have an open transaction
        if db.in_transaction():
            db.commit()
    except Exception:
        # Rollback on any exception
        if db.in_transaction():
            db.rollback()
        raise
    finally:
        # Always close the session
        db.close()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency: provides a database session per request.

    Usage:
        @router.get("/products")
        async def list_products(db: Session = Depends(get_db)):
            ...

    Yields:
        Database session
    """

    try:
        # delegate to the core dependency that manages Session lifecycle
        yield from _get_db()
    except sa_exc.TimeoutError as e:  # QueuePool acquisition timed out
        # Import here to avoid circular dependency
        from paperbook_backend.exceptions import ServiceUnavailableException
        # 503 is the right code for transient capacity issues
        raise ServiceUnavailableException(
            detail="Database is busy. Please retry shortly.",
            headers={"Retry-After": "2"}  # seconds; tune to your traffic
        ) from e
