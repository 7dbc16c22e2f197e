"""Database setup and session management."""

import logging
from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class StoreNotConfiguredError(RuntimeError):
    """Raised when a write is attempted without a configured persisted store.

    Read paths degrade to empty results instead; writes must never be
    silently dropped, so callers surface this to the user.
    """

    def __init__(self, operation: str = "write"):
        self.operation = operation
        super().__init__(
            f"Unable to {operation}: the portfolio store is not configured. "
            "Set DATABASE_URL to enable persistence."
        )


def is_store_configured() -> bool:
    """Return True if a database URL is configured."""
    return bool(settings.DATABASE_URL.strip())


def require_session(db: Optional[Session], operation: str) -> Session:
    """Return ``db`` or raise :class:`StoreNotConfiguredError` when it is None."""
    if db is None:
        raise StoreNotConfiguredError(operation)
    return db


@lru_cache
def get_engine() -> Optional[Engine]:
    """Get or create the database engine (cached).

    Returns ``None`` when ``DATABASE_URL`` is empty.
    """
    if not is_store_configured():
        logger.warning("DATABASE_URL is empty, running without a persisted store")
        return None

    connect_args = {}
    database_url = settings.DATABASE_URL

    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        connect_args=connect_args,
        echo=False,
    )


def get_session_local() -> Optional[sessionmaker]:
    """Get a sessionmaker bound to the engine, or None without a store."""
    engine = get_engine()
    if engine is None:
        return None
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> bool:
    """Create all tables if the store is configured.

    Returns:
        True if tables were created (or already existed), False without a store.
    """
    engine = get_engine()
    if engine is None:
        return False

    import models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(bind=engine)
    return True


def get_db():
    """Dependency that provides a database session.

    Yields ``None`` when the store is not configured, so read endpoints can
    degrade to empty results and write endpoints can raise
    :class:`StoreNotConfiguredError`.

    Transaction conventions: services ``commit()`` their own writes and
    ``rollback()`` before re-raising on failure.
    """
    SessionLocal = get_session_local()
    if SessionLocal is None:
        yield None
        return

    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
