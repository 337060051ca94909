"""Pydantic request/response schemas."""

from app.schemas.admin import AdminResponse, PermissionRequest, PermissionResponse
from app.schemas.common import Envelope, PagedData, PagedQuery, PageMeta
from app.schemas.health import HealthResponse
from app.schemas.settings import AppSettingsResponse
from app.schemas.tag import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    TagCreate,
    TagListParams,
    TagResponse,
    TagUpdate,
)
from app.schemas.user import (
    AuthResponse,
    ChangePasswordRequest,
    SignInRequest,
    SignUpRequest,
    UserListParams,
    UserResponse,
    UserSummary,
    UserUpdate,
)

__all__ = [
    "AdminResponse",
    "AppSettingsResponse",
    "AuthResponse",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    "ChangePasswordRequest",
    "Envelope",
    "HealthResponse",
    "PageMeta",
    "PagedData",
    "PagedQuery",
    "PermissionRequest",
    "PermissionResponse",
    "SignInRequest",
    "SignUpRequest",
    "TagCreate",
    "TagListParams",
    "TagResponse",
    "TagUpdate",
    "UserListParams",
    "UserResponse",
    "UserSummary",
    "UserUpdate",
]
