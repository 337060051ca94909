"""Request/response schemas for tag categories and tags."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import PagedQuery
from app.schemas.user import UserSummary


class CategoryCreate(BaseModel):
    slug: str = Field(..., min_length=1, max_length=255, description="Normalized before storage")
    name: str = Field(default="", max_length=255, description="Display name")


class CategoryUpdate(BaseModel):
    id: uuid.UUID
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    name: str | None = Field(default=None, max_length=255)


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    slug: str
    name: str
    created_at: datetime
    updated_at: datetime
    created_by: UserSummary | None = None
    updated_by: UserSummary | None = None


class TagCreate(BaseModel):
    slug: str = Field(..., min_length=1, max_length=255)
    name: str = Field(default="", max_length=255)
    category_id: uuid.UUID


class TagUpdate(BaseModel):
    id: uuid.UUID
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    category_id: uuid.UUID | None = None


class TagResponse(BaseModel):
    id: uuid.UUID
    slug: str
    name: str
    category_id: uuid.UUID
    category_slug: str
    category_name: str


class TagListParams(PagedQuery):
    category_id: uuid.UUID | None = None
