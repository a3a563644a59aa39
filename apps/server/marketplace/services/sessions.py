"""Resolve caller sessions from access tokens and check capabilities."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from jose import JWTError

from marketplace.core.security import create_access_token, decode_access_token
from marketplace.models.user import User, UserRole
from marketplace.services.exceptions import Unauthorized

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionPrincipal:
    """Identity and role of the caller, as carried by their access token."""

    user_id: uuid.UUID
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


def issue_session_token(user: User) -> str:
    """Create an access token embedding the user's id and role."""

    return create_access_token(subject=str(user.id), extra_claims={"role": user.role.value})


def resolve_session(token: Optional[str]) -> Optional[SessionPrincipal]:
    """Return the session for ``token`` or ``None`` when it cannot be trusted.

    Missing, malformed, expired or tampered tokens, and tokens naming an
    unknown role, all resolve to ``None``. No database access happens here.
    """

    if not token:
        return None

    try:
        payload = decode_access_token(token)
    except JWTError:
        logger.debug("Rejected access token that failed verification")
        return None

    subject = payload.get("sub")
    role = payload.get("role")
    if subject is None or role is None:
        return None

    try:
        return SessionPrincipal(user_id=uuid.UUID(str(subject)), role=UserRole(role))
    except ValueError:
        return None


def require_admin(principal: Optional[SessionPrincipal]) -> SessionPrincipal:
    """Return ``principal`` if it holds the admin role, else raise ``Unauthorized``."""

    if principal is None or principal.role is not UserRole.ADMIN:
        raise Unauthorized()
    return principal


__all__ = [
    "SessionPrincipal",
    "issue_session_token",
    "require_admin",
    "resolve_session",
]
