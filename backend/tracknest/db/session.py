"""
Database session management.
"""
import logging
from contextlib import contextmanager
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from tracknest.core.config import settings
from tracknest.core.exceptions import PersistenceError
from tracknest.db.base import Base

logger = logging.getLogger(__name__)


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine, applying the options each backend needs."""
    if _is_sqlite(url):
        in_memory = url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            # An in-memory database only lives as long as its one connection
            poolclass=StaticPool if in_memory else None,
        )

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600
    )


engine = create_db_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def db_errors(db: Session, action: str):
    """
    Roll back and re-raise database failures as PersistenceError.

    LookupError is what SQLAlchemy raises when a stored enum value has no
    matching member; it is treated as a failed read, never defaulted.
    """
    try:
        yield
    except (SQLAlchemyError, LookupError) as e:
        db.rollback()
        logger.error(f"Database error while trying to {action}: {e}", exc_info=True)
        raise PersistenceError(f"Failed to {action}") from e


def init_db():
    """Initialize database tables."""
    # Import models so they register with the metadata
    import tracknest.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready")
