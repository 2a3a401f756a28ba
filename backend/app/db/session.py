"""
Database session management.
"""
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
import logging
from app.core.config import settings
from app.core.exceptions import UpstreamError
from app.db.base import Base

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    pool_recycle=3600
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def upstream_errors(db: Session, action: str):
    """
    Turn database failures inside the block into UpstreamError.

    The session is rolled back so no partial write survives; domain errors
    raised inside the block pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to {action}: {e}", exc_info=True)
        raise UpstreamError(f"Failed to {action}") from e


def init_db():
    """Initialize database tables."""
    import app.models  # noqa: F401  registers every table on Base.metadata
    Base.metadata.create_all(bind=engine)
