"""Engine, session factory and request-scoped sessions."""

from __future__ import annotations

import logging
import time
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from marketplace.core.config import settings

logger = logging.getLogger(__name__)

# Stale pooled connections are replaced before use.
engine = create_engine(settings.database_url, future=True, pool_pre_ping=True)
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    future=True,
)


def get_db() -> Generator[Session, None, None]:
    """One session per request; the unit of work decides commit or rollback."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session for code running outside a request, such as CLI commands."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def verify_connection(
    max_attempts: Optional[int] = None,
    delay_seconds: Optional[float] = None,
) -> None:
    """Run ``SELECT 1`` until the database answers, waiting longer each time.

    Defaults come from ``DB_CONNECT_MAX_ATTEMPTS`` and
    ``DB_CONNECT_RETRY_DELAY``. Attempt ``n`` is followed by a sleep of
    ``n * delay_seconds``; the last error is raised once attempts run out.
    """

    attempts = max_attempts if max_attempts is not None else settings.db_connect_max_attempts
    delay = delay_seconds if delay_seconds is not None else settings.db_connect_retry_delay

    last_exc: Optional[SQLAlchemyError] = None
    for attempt in range(1, attempts + 1):
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            last_exc = exc
            logger.warning(
                "Database not ready (attempt %d/%d): %s",
                attempt,
                attempts,
                type(exc).__name__,
            )
            if attempt < attempts:
                time.sleep(delay * attempt)
            continue

        if attempt > 1:
            logger.info("Database connection established after %d attempt(s)", attempt)
        return

    logger.error("Database unreachable after %d attempts", attempts, exc_info=last_exc)
    if last_exc is None:
        raise RuntimeError("Database connection verification failed")
    raise last_exc


__all__ = ["engine", "SessionLocal", "get_db", "session_scope", "verify_connection"]
