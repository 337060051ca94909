"""Response envelope and paged-data schemas shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Every response body: {status, data, message}."""

    status: int = Field(default=200, description="HTTP status code, mirrored in the body")
    data: T | None = Field(default=None, description="Payload; null on errors")
    message: str = Field(default="", description="Human-readable message; empty on success")


class PageMeta(BaseModel):
    per_page: int
    page: int
    total: int


class PagedData(BaseModel, Generic[T]):
    """A bounded page of rows plus the total count matching the same filter."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[T] = Field(default_factory=list, alias="list")
    meta: PageMeta


class PagedQuery(BaseModel):
    """Generic listing parameters accepted by every listing endpoint."""

    limit: int = Field(default=50, description="Page size; must be greater than 0")
    offset: int = Field(default=0, description="Rows to skip; must not be negative")
    sort: str = Field(default="", description="'<column>' or '<column> asc|desc'")
    keywords: str = Field(default="", description="Case-insensitive substring filter")
