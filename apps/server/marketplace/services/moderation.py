"""Admin moderation actions on user accounts.

Every action follows the same shape: check the caller's capability, apply
the business rules, then stage the account change and its audit entry in a
single unit of work so both land together or neither does.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from marketplace.db.repositories import parse_uuid
from marketplace.db.unit_of_work import SqlAlchemyUnitOfWork
from marketplace.models.admin_audit_log import AdminAction
from marketplace.models.user import User, UserRole
from marketplace.services.exceptions import (
    InvalidStateRejected,
    NotFound,
    PrivilegedTargetRejected,
    SelfTargetRejected,
    ValidationFailed,
)
from marketplace.services.sessions import SessionPrincipal, require_admin

logger = logging.getLogger(__name__)

USER_TARGET_TYPE = "User"


def _is_self(actor: SessionPrincipal, target_id: uuid.UUID | str) -> bool:
    return parse_uuid(target_id) == actor.user_id


def _load_target(uow: SqlAlchemyUnitOfWork, target_id: uuid.UUID | str) -> User:
    user = uow.users.get(target_id)
    if user is None:
        raise NotFound("User not found")
    return user


def suspend_user(
    uow: SqlAlchemyUnitOfWork,
    actor: Optional[SessionPrincipal],
    target_id: uuid.UUID | str,
    reason: Any,
    *,
    ip_address: Optional[str] = None,
) -> User:
    """Suspend a non-admin account and record ``SUSPEND_USER``.

    ``reason`` is taken as sent by the client and checked only after the
    capability and self-target checks. It must be a non-empty string and is
    stored verbatim, not trimmed.
    """

    actor = require_admin(actor)

    if _is_self(actor, target_id):
        raise SelfTargetRejected("Cannot suspend your own account")

    if not isinstance(reason, str) or not reason:
        raise ValidationFailed("Reason is required")

    with uow:
        user = _load_target(uow, target_id)
        if user.role is UserRole.ADMIN:
            raise PrivilegedTargetRejected("Cannot suspend admin accounts")

        user.is_suspended = True
        user.suspended_at = datetime.now(timezone.utc)
        user.suspended_reason = reason
        uow.audit_logs.append(
            admin_id=actor.user_id,
            action=AdminAction.SUSPEND_USER,
            target_type=USER_TARGET_TYPE,
            target_id=str(user.id),
            details={"reason": reason},
            ip_address=ip_address,
        )
        uow.commit()

    logger.info("User %s suspended by admin %s", target_id, actor.user_id)
    return user


def reactivate_user(
    uow: SqlAlchemyUnitOfWork,
    actor: Optional[SessionPrincipal],
    target_id: uuid.UUID | str,
    *,
    ip_address: Optional[str] = None,
) -> User:
    """Lift a suspension and record ``REACTIVATE_USER``."""

    actor = require_admin(actor)

    with uow:
        user = _load_target(uow, target_id)
        if not user.is_suspended:
            raise InvalidStateRejected("User is not suspended")

        user.is_suspended = False
        user.is_active = True
        user.suspended_at = None
        user.suspended_reason = None
        uow.audit_logs.append(
            admin_id=actor.user_id,
            action=AdminAction.REACTIVATE_USER,
            target_type=USER_TARGET_TYPE,
            target_id=str(user.id),
            ip_address=ip_address,
        )
        uow.commit()

    logger.info("User %s reactivated by admin %s", target_id, actor.user_id)
    return user


def change_user_role(
    uow: SqlAlchemyUnitOfWork,
    actor: Optional[SessionPrincipal],
    target_id: uuid.UUID | str,
    role: Any,
    *,
    ip_address: Optional[str] = None,
) -> User:
    """Assign ``role`` to the target and record ``CHANGE_USER_ROLE``.

    A missing or unknown role is rejected after the self-target check.
    """

    actor = require_admin(actor)

    if _is_self(actor, target_id):
        raise SelfTargetRejected("Cannot change your own role")

    if role is None:
        raise ValidationFailed("Role is required")
    try:
        new_role = UserRole(role)
    except (TypeError, ValueError) as exc:
        raise ValidationFailed(f"Invalid role '{role}'") from exc

    with uow:
        user = _load_target(uow, target_id)
        previous_role = user.role

        user.role = new_role
        uow.audit_logs.append(
            admin_id=actor.user_id,
            action=AdminAction.CHANGE_USER_ROLE,
            target_type=USER_TARGET_TYPE,
            target_id=str(user.id),
            details={"previousRole": previous_role.value, "newRole": new_role.value},
            ip_address=ip_address,
        )
        uow.commit()

    logger.info(
        "User %s role changed from %s to %s by admin %s",
        target_id,
        previous_role.value,
        new_role.value,
        actor.user_id,
    )
    return user


__all__ = [
    "USER_TARGET_TYPE",
    "change_user_role",
    "reactivate_user",
    "suspend_user",
]
