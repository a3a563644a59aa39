"""Admin moderation API routes."""

from __future__ import annotations

import logging
import math
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.api.dependencies import get_db, json_field, read_json_body, require_admin_session
from marketplace.db.unit_of_work import SqlAlchemyUnitOfWork
from marketplace.models.admin_audit_log import AdminAction
from marketplace.models.user import UserRole
from marketplace.schemas.admin_audit_log import AdminAuditLogList, AdminAuditLogResponse
from marketplace.schemas.user_admin import (
    ActionResponse,
    AdminUserResponse,
    PaginatedUserList,
    UserDetailAdminResponse,
)
from marketplace.services.admin_audit import get_admin_audit_logs
from marketplace.services.exceptions import NotFound, PersistenceFailure
from marketplace.services.moderation import change_user_role, reactivate_user, suspend_user
from marketplace.services.sessions import SessionPrincipal
from marketplace.services.users import get_paginated_users, get_user_by_id

logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin_session)],
)


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


@router.get("/users", response_model=PaginatedUserList)
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    q: Optional[str] = Query(None),
    role: Optional[UserRole] = Query(None),
    status: Optional[str] = Query(None, pattern="^(active|suspended|inactive)$"),
    db: Session = Depends(get_db),
) -> PaginatedUserList:
    """List users newest first with search, role and status filters (admin only)."""
    users, total = get_paginated_users(
        db,
        page=page,
        limit=limit,
        search=q,
        role=role,
        status=status,
    )
    return PaginatedUserList(
        users=[AdminUserResponse.model_validate(user) for user in users],
        total=total,
        page=page,
        total_pages=math.ceil(total / limit) if total else 0,
    )


@router.get("/users/{user_id}", response_model=UserDetailAdminResponse)
def get_user_detail(
    user_id: str,
    db: Session = Depends(get_db),
) -> UserDetailAdminResponse:
    """Get a single user including suspension details (admin only)."""
    user = get_user_by_id(db, user_id)
    if user is None:
        raise NotFound("User not found")
    return UserDetailAdminResponse.model_validate(user)


@router.post("/users/{user_id}/suspend", response_model=ActionResponse)
def suspend_user_endpoint(
    user_id: str,
    request: Request,
    db: Session = Depends(get_db),
    session: SessionPrincipal = Depends(require_admin_session),
    payload: Any = Depends(read_json_body),
) -> ActionResponse:
    """Suspend a user account and record the action (admin only)."""
    try:
        suspend_user(
            SqlAlchemyUnitOfWork(db),
            session,
            user_id,
            json_field(payload, "reason"),
            ip_address=_client_ip(request),
        )
    except SQLAlchemyError as exc:
        logger.exception("Error suspending user %s", user_id)
        raise PersistenceFailure("Failed to suspend user") from exc
    return ActionResponse()


@router.post("/users/{user_id}/reactivate", response_model=ActionResponse)
def reactivate_user_endpoint(
    user_id: str,
    request: Request,
    db: Session = Depends(get_db),
    session: SessionPrincipal = Depends(require_admin_session),
) -> ActionResponse:
    """Lift a user's suspension and record the action (admin only)."""
    try:
        reactivate_user(
            SqlAlchemyUnitOfWork(db),
            session,
            user_id,
            ip_address=_client_ip(request),
        )
    except SQLAlchemyError as exc:
        logger.exception("Error reactivating user %s", user_id)
        raise PersistenceFailure("Failed to reactivate user") from exc
    return ActionResponse()


@router.patch("/users/{user_id}/role", response_model=ActionResponse)
def change_user_role_endpoint(
    user_id: str,
    request: Request,
    db: Session = Depends(get_db),
    session: SessionPrincipal = Depends(require_admin_session),
    payload: Any = Depends(read_json_body),
) -> ActionResponse:
    """Change a user's role and record the previous and new role (admin only)."""
    try:
        change_user_role(
            SqlAlchemyUnitOfWork(db),
            session,
            user_id,
            json_field(payload, "role"),
            ip_address=_client_ip(request),
        )
    except SQLAlchemyError as exc:
        logger.exception("Error changing role of user %s", user_id)
        raise PersistenceFailure("Failed to change user role") from exc
    return ActionResponse()


@router.get("/audit-logs", response_model=AdminAuditLogList)
def list_audit_logs(
    admin_id: Optional[UUID] = Query(None),
    action: Optional[AdminAction] = Query(None),
    target_type: Optional[str] = Query(None),
    target_id: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
) -> AdminAuditLogList:
    """Read the admin audit log newest first (admin only)."""
    entries, total, effective_limit = get_admin_audit_logs(
        db,
        admin_id=admin_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        skip=skip,
        limit=limit,
    )
    return AdminAuditLogList(
        entries=[AdminAuditLogResponse.model_validate(entry) for entry in entries],
        total=total,
        skip=skip,
        limit=effective_limit,
    )


__all__ = ["router"]
