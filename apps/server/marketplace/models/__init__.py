"""ORM model exports."""

from .admin_audit_log import AdminAction, AdminAuditLog
from .user import User, UserRole

__all__ = [
	"AdminAction",
	"AdminAuditLog",
	"User",
	"UserRole",
]
