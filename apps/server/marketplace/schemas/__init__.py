"""Pydantic schemas exposed by the API."""

from .admin_audit_log import AdminAuditLogList, AdminAuditLogResponse
from .auth import TokenResponse, UserLogin
from .user_admin import (
    ActionResponse,
    AdminUserResponse,
    PaginatedUserList,
    UserDetailAdminResponse,
)

__all__ = [
    "ActionResponse",
    "AdminAuditLogList",
    "AdminAuditLogResponse",
    "AdminUserResponse",
    "PaginatedUserList",
    "TokenResponse",
    "UserDetailAdminResponse",
    "UserLogin",
]
