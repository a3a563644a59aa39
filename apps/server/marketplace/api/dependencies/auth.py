"""Session dependencies for API routes."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from marketplace.services.sessions import SessionPrincipal, require_admin, resolve_session


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_optional_session(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
) -> Optional[SessionPrincipal]:
    """Resolve the caller's session from the bearer token, if any."""

    return resolve_session(token)


def require_admin_session(
    session: Annotated[Optional[SessionPrincipal], Depends(get_optional_session)],
) -> SessionPrincipal:
    """Reject callers without an admin session before any data access."""

    return require_admin(session)


__all__ = ["oauth2_scheme", "get_optional_session", "require_admin_session"]
