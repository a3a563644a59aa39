"""API dependency exports."""

from marketplace.db.session import get_db

from .auth import get_optional_session, require_admin_session
from .request_body import json_field, read_json_body

__all__ = [
    "get_db",
    "get_optional_session",
    "json_field",
    "read_json_body",
    "require_admin_session",
]
