"""Authentication-related Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr


class UserLogin(BaseModel):
    """Schema for logging in with email and password."""

    email: EmailStr
    password: str

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class TokenResponse(BaseModel):
    """Schema for returning an access token to the client."""

    access_token: str
    token_type: str = "bearer"

    model_config = ConfigDict(frozen=True)


__all__ = [
    "TokenResponse",
    "UserLogin",
]
