"""Account routes: sign-up/sign-in, first-admin bootstrap, self service and public reads."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import CurrentUserID
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.schemas.common import Envelope, PagedData
from app.schemas.user import (
    AuthResponse,
    ChangePasswordRequest,
    SignInRequest,
    SignUpRequest,
    UserListParams,
    UserResponse,
    UserUpdate,
)
from app.services import accounts, admins
from app.services.paging import page_data

user_router = APIRouter()
users_router = APIRouter()


@user_router.post("/sign-up", response_model=Envelope[AuthResponse])
def sign_up(
    body: SignUpRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Envelope[AuthResponse]:
    """Create an account with the default permission bitmask; returns the user and a bearer token."""
    user, token = accounts.sign_up(db, settings, body)
    return Envelope(data=AuthResponse(user=accounts.to_response(user, include_email=True), token=token))


@user_router.post("/sign-in", response_model=Envelope[str])
def sign_in(
    body: SignInRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Envelope[str]:
    """
    Authenticate with name (or email) and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    return Envelope(data=accounts.sign_in(db, settings, body))


@user_router.post("/init-admin-create", response_model=Envelope[AuthResponse])
def init_admin_create(
    body: SignUpRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Envelope[AuthResponse]:
    """Bootstrap the first administrator. 403 once an admin has been created."""
    user, token = admins.create_initial_admin(db, settings, body)
    return Envelope(data=AuthResponse(user=accounts.to_response(user, include_email=True), token=token))


@user_router.put("/change-password", response_model=Envelope[UserResponse])
def change_password(
    body: ChangePasswordRequest,
    user_id: CurrentUserID,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Envelope[UserResponse]:
    user = accounts.change_password(db, settings, user_id, body)
    return Envelope(data=accounts.to_response(user, include_email=True))


@user_router.get("", response_model=Envelope[UserResponse])
def get_self(
    user_id: CurrentUserID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[UserResponse]:
    return Envelope(data=accounts.to_response(accounts.get_user(db, user_id), include_email=True))


@user_router.put("", response_model=Envelope[UserResponse])
def update_self(
    body: UserUpdate,
    user_id: CurrentUserID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[UserResponse]:
    user = accounts.update_user(db, user_id, body)
    return Envelope(data=accounts.to_response(user, include_email=True))


@user_router.delete("", response_model=Envelope[None])
def delete_self(
    user_id: CurrentUserID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[None]:
    """Delete the caller's account together with its admin role and permissions."""
    accounts.delete_user(db, user_id)
    return Envelope()


@users_router.get("", response_model=Envelope[PagedData[UserResponse]])
def list_users(
    params: Annotated[UserListParams, Query()],
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[PagedData[UserResponse]]:
    """Public, paged user list (emails are not exposed)."""
    rows, total = accounts.list_users(db, params)
    items = [accounts.to_response(u) for u in rows]
    return Envelope(data=page_data(items, total, params.offset, params.limit))


@users_router.get("/{user_id}", response_model=Envelope[UserResponse])
def get_user(
    user_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[UserResponse]:
    return Envelope(data=accounts.to_response(accounts.get_user(db, user_id)))
