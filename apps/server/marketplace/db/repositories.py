"""Repositories over the users and admin audit log tables."""

from __future__ import annotations

import uuid
from typing import Any, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from marketplace.models.admin_audit_log import AdminAction, AdminAuditLog
from marketplace.models.user import User, UserRole


USER_STATUS_FILTERS = ("active", "suspended", "inactive")


def parse_uuid(value: uuid.UUID | str) -> Optional[uuid.UUID]:
    """Parse any spelling ``uuid.UUID`` accepts; ``None`` when malformed."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class UserRepository:
    """Query and load helpers for :class:`User` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: uuid.UUID | str) -> Optional[User]:
        """Return the user or ``None``; malformed ids never match."""

        parsed = parse_uuid(user_id)
        if parsed is None:
            return None
        return self.session.get(User, parsed)

    def get_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email.strip().lower())
        return self.session.execute(statement).scalar_one_or_none()

    def add(self, user: User) -> User:
        self.session.add(user)
        return user

    def list_paginated(
        self,
        *,
        offset: int = 0,
        limit: int = 20,
        search: Optional[str] = None,
        role: Optional[UserRole] = None,
        status: Optional[str] = None,
    ) -> tuple[list[User], int]:
        """Return one page of users, newest first, plus the total match count."""

        query = select(User)

        if role is not None:
            query = query.where(User.role == role)

        if status == "active":
            query = query.where(User.is_active.is_(True), User.is_suspended.is_(False))
        elif status == "suspended":
            query = query.where(User.is_suspended.is_(True))
        elif status == "inactive":
            query = query.where(User.is_active.is_(False))

        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(User.email.ilike(pattern), User.full_name.ilike(pattern))
            )

        count_query = select(func.count()).select_from(query.subquery())
        total = self.session.execute(count_query).scalar_one()

        query = query.order_by(User.created_at.desc(), User.email).offset(offset).limit(limit)
        users = list(self.session.execute(query).scalars().all())
        return users, total


class AdminAuditLogRepository:
    """Append-only access to the admin audit log.

    Entries can be appended and read; there is deliberately no update or
    delete method.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def append(
        self,
        *,
        admin_id: uuid.UUID,
        action: AdminAction | str,
        target_type: str,
        target_id: str,
        details: Optional[dict[str, Any]] = None,
        ip_address: Optional[str] = None,
    ) -> AdminAuditLog:
        entry = AdminAuditLog(
            admin_id=admin_id,
            action=AdminAction(action).value,
            target_type=target_type,
            target_id=str(target_id),
            details=details,
            ip_address=ip_address,
        )
        self.session.add(entry)
        return entry

    def list_entries(
        self,
        *,
        admin_id: Optional[uuid.UUID] = None,
        action: Optional[AdminAction] = None,
        target_type: Optional[str] = None,
        target_id: Optional[str] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[list[AdminAuditLog], int]:
        query = select(AdminAuditLog)
        if admin_id is not None:
            query = query.where(AdminAuditLog.admin_id == admin_id)
        if action is not None:
            query = query.where(AdminAuditLog.action == AdminAction(action).value)
        if target_type is not None:
            query = query.where(AdminAuditLog.target_type == target_type)
        if target_id is not None:
            query = query.where(AdminAuditLog.target_id == target_id)

        count_query = select(func.count()).select_from(query.subquery())
        total = self.session.execute(count_query).scalar_one()

        query = query.order_by(AdminAuditLog.created_at.desc()).offset(offset).limit(limit)
        entries = list(self.session.execute(query).scalars().all())
        return entries, total


__all__ = ["AdminAuditLogRepository", "USER_STATUS_FILTERS", "UserRepository", "parse_uuid"]
