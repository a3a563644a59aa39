"""Authentication API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from marketplace.api.dependencies import get_db
from marketplace.core.config import settings
from marketplace.schemas.auth import TokenResponse, UserLogin
from marketplace.services.sessions import issue_session_token
from marketplace.services.users import authenticate_user


router = APIRouter(tags=["auth"])

limiter = Limiter(key_func=get_remote_address)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.login_rate_limit)
def login_user(
    request: Request,
    payload: UserLogin,
    db: Session = Depends(get_db),
) -> TokenResponse:
    """Authenticate a user by email/password and return a JWT carrying their role."""

    user = authenticate_user(db, payload.email, payload.password)
    return TokenResponse(access_token=issue_session_token(user))


__all__ = ["limiter", "router"]
