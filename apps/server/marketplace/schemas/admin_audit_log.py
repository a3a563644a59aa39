"""Pydantic schemas for admin audit logging."""

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AdminAuditLogResponse(BaseModel):
    """Response schema for admin audit log data."""

    id: UUID
    admin_id: UUID
    action: str
    target_type: str
    target_id: str
    details: Optional[dict[str, Any]] = None
    ip_address: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdminAuditLogList(BaseModel):
    """Response schema for a page of audit log entries."""

    entries: List[AdminAuditLogResponse]
    total: int
    skip: int
    limit: int
