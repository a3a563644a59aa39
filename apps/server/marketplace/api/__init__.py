"""Public API package exports."""

from .dependencies import require_admin_session
from .routes.admin import router as admin_router
from .routes.auth import limiter
from .routes.auth import router as auth_router

__all__ = ["admin_router", "auth_router", "limiter", "require_admin_session"]
