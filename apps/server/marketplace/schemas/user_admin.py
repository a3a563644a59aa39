"""Pydantic schemas for admin user management."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from marketplace.models.user import UserRole


class AdminUserResponse(BaseModel):
    """Response schema for a row in the admin user list."""

    id: UUID
    email: str
    full_name: Optional[str] = None
    role: UserRole
    is_active: bool
    is_suspended: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserDetailAdminResponse(AdminUserResponse):
    """Response schema for a single user including suspension details."""

    suspended_at: Optional[datetime] = None
    suspended_reason: Optional[str] = None
    last_login_at: Optional[datetime] = None
    updated_at: datetime


class PaginatedUserList(BaseModel):
    """Response schema for paginated user list."""

    users: List[AdminUserResponse]
    total: int
    page: int
    total_pages: int


class ActionResponse(BaseModel):
    """Acknowledgement returned by moderation actions."""

    success: bool = True
