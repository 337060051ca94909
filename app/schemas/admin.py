"""Schemas for admin role membership and permission management."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AdminResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    admin_id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class PermissionRequest(BaseModel):
    """Set a user's capability bitmask (READ=1, WRITE=2, APPROVE=4, MODERATE=8)."""

    user_id: uuid.UUID
    permission_level: int = Field(..., ge=0, le=15, description="Bitwise OR of capability flags")


class PermissionResponse(BaseModel):
    user_id: uuid.UUID
    permission_level: int
    updated_at: datetime
