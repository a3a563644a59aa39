"""Transactional unit of work over a SQLAlchemy session."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Optional

from sqlalchemy.orm import Session

from marketplace.db.repositories import AdminAuditLogRepository, UserRepository

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork:
    """Group repository writes so they are committed together or not at all.

    Use as a context manager and call :meth:`commit` once every write has been
    staged. Leaving the block without committing, raising inside it, or a
    failing commit all roll the session back::

        with SqlAlchemyUnitOfWork(db) as uow:
            user = uow.users.get(user_id)
            user.is_suspended = True
            uow.audit_logs.append(...)
            uow.commit()
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.audit_logs = AdminAuditLogRepository(session)
        self._committed = False

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._committed = False
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        if exc_type is not None:
            logger.debug("Rolling back unit of work after %s", exc_type.__name__)
            self.rollback()
        elif not self._committed:
            self.rollback()

    @property
    def committed(self) -> bool:
        return self._committed

    def commit(self) -> None:
        """Flush and commit all staged writes in one transaction."""

        try:
            self.session.commit()
        except Exception:
            self.rollback()
            raise
        self._committed = True

    def rollback(self) -> None:
        self.session.rollback()


__all__ = ["SqlAlchemyUnitOfWork"]
