"""Administrative routes: admin role management and user permission bitmasks."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.schemas.admin import AdminResponse, PermissionRequest, PermissionResponse
from app.schemas.common import Envelope, PagedData
from app.schemas.user import AuthResponse, SignUpRequest, UserListParams, UserResponse, UserUpdate
from app.services import accounts, admins, permissions
from app.services.paging import page_data

# Every route here sits behind the admin guard.
router = APIRouter(dependencies=[Depends(require_admin)])


def _permission_response(row) -> PermissionResponse:
    return PermissionResponse(
        user_id=row.user_id,
        permission_level=row.permission.value,
        updated_at=row.updated_at,
    )


@router.get("/manage", response_model=Envelope[PagedData[UserResponse]])
def list_admins(
    params: Annotated[UserListParams, Query()],
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[PagedData[UserResponse]]:
    rows, total = admins.list_admins(db, params)
    items = [accounts.to_response(u, include_email=True) for u in rows]
    return Envelope(data=page_data(items, total, params.offset, params.limit))


@router.post("/manage", response_model=Envelope[AuthResponse])
def create_admin(
    body: SignUpRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Envelope[AuthResponse]:
    """Create a brand-new user who is an admin from the start."""
    user, token = admins.create_admin(db, settings, body)
    return Envelope(data=AuthResponse(user=accounts.to_response(user, include_email=True), token=token))


@router.put("/manage/{user_id}", response_model=Envelope[AdminResponse])
def assign_admin(
    user_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[AdminResponse]:
    """Grant the admin role to an existing user. 409 if they already hold it."""
    return Envelope(data=admins.to_response(admins.assign_admin(db, user_id)))


@router.delete("/manage/{user_id}", response_model=Envelope[AdminResponse])
def remove_admin(
    user_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[AdminResponse]:
    """Revoke the admin role. 404 if the user is not an admin."""
    return Envelope(data=admins.remove_admin(db, user_id))


@router.get("/user/permission/{user_id}", response_model=Envelope[PermissionResponse])
def get_permission(
    user_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[PermissionResponse]:
    return Envelope(data=_permission_response(permissions.get_by_user_id(db, user_id)))


@router.put("/user/permission", response_model=Envelope[PermissionResponse])
def set_permission(
    body: PermissionRequest,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[PermissionResponse]:
    """Set a user's capability bitmask, creating the row if needed."""
    level = permissions.from_mask(body.permission_level)
    return Envelope(data=_permission_response(permissions.set_permission(db, body.user_id, level)))


@router.put("/user/{user_id}", response_model=Envelope[UserResponse])
def update_user(
    user_id: uuid.UUID,
    body: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[UserResponse]:
    user = accounts.update_user(db, user_id, body)
    return Envelope(data=accounts.to_response(user, include_email=True))
