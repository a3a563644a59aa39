"""Service functions for reading the admin audit log."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from marketplace.core.config import settings
from marketplace.db.repositories import AdminAuditLogRepository
from marketplace.models.admin_audit_log import AdminAction, AdminAuditLog


def get_admin_audit_logs(
    db: Session,
    *,
    admin_id: Optional[UUID] = None,
    action: Optional[AdminAction] = None,
    target_type: Optional[str] = None,
    target_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 50,
) -> tuple[List[AdminAuditLog], int, int]:
    """Return one page of audit entries, newest first.

    The requested ``limit`` is capped at the configured page limit.

    Returns:
        Tuple of (entries, total matching entries, limit actually applied)
    """

    limit = min(limit, settings.audit_log_page_limit)
    entries, total = AdminAuditLogRepository(db).list_entries(
        admin_id=admin_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        offset=skip,
        limit=limit,
    )
    return entries, total, limit


__all__ = [
    "get_admin_audit_logs",
]
