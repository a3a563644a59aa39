"""Service layer helpers for domain operations."""

from .admin_audit import get_admin_audit_logs
from .exceptions import (
    AccountDeactivatedError,
    AccountSuspendedError,
    InvalidCredentialsError,
    InvalidStateRejected,
    NotFound,
    PersistenceFailure,
    PrivilegedTargetRejected,
    SelfTargetRejected,
    ServiceError,
    Unauthorized,
    UserEmailAlreadyExistsError,
    ValidationFailed,
)
from .moderation import change_user_role, reactivate_user, suspend_user
from .sessions import SessionPrincipal, issue_session_token, require_admin, resolve_session
from .users import (
    authenticate_user,
    create_user,
    ensure_admin_user,
    get_paginated_users,
    get_user_by_email,
    get_user_by_id,
)

__all__ = [
    "AccountDeactivatedError",
    "AccountSuspendedError",
    "InvalidCredentialsError",
    "InvalidStateRejected",
    "NotFound",
    "PersistenceFailure",
    "PrivilegedTargetRejected",
    "SelfTargetRejected",
    "ServiceError",
    "SessionPrincipal",
    "Unauthorized",
    "UserEmailAlreadyExistsError",
    "ValidationFailed",
    "authenticate_user",
    "change_user_role",
    "create_user",
    "ensure_admin_user",
    "get_admin_audit_logs",
    "get_paginated_users",
    "get_user_by_email",
    "get_user_by_id",
    "issue_session_token",
    "reactivate_user",
    "require_admin",
    "resolve_session",
    "suspend_user",
]
