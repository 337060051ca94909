"""User accounts: sign-up/sign-in, self-service updates and transactional deletion."""

import logging
import uuid
from datetime import UTC, datetime, timedelta

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, selectinload

from app.core.config import Settings
from app.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from app.core.security import create_access_token, hash_password, verify_password
from app.models import Admin, Permission, PermissionLevel, User
from app.schemas.user import (
    ChangePasswordRequest,
    SignInRequest,
    SignUpRequest,
    UserListParams,
    UserResponse,
    UserUpdate,
)
from app.services.paging import resolve_page
from app.services.permissions import default_level

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = "User with this name/email already exists"

USER_SORTABLE = {
    "id": User.id,
    "name": User.name,
    "email": User.email,
    "created_at": User.created_at,
    "updated_at": User.updated_at,
}


def active_users(db: Session) -> Query:
    """Base query for users that are not tombstoned, with role and permission loaded."""
    return (
        db.query(User)
        .options(selectinload(User.admin), selectinload(User.permission))
        .filter(User.deleted_at.is_(None))
    )


def to_response(user: User, include_email: bool = False) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email if include_email else None,
        created_at=user.created_at,
        updated_at=user.updated_at,
        admin=user.admin is not None,
        permission=user.permission.permission.value if user.permission is not None else 0,
    )


def issue_token(user: User, settings: Settings) -> str:
    return create_access_token(
        user.id,
        user.name,
        secret=settings.JWT_SECRET.get_secret_value(),
        ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )


def is_active(db: Session, user_id: uuid.UUID) -> bool:
    return (
        db.query(User.id)
        .filter(User.id == user_id, User.deleted_at.is_(None))
        .first()
        is not None
    )


def get_user(db: Session, user_id: uuid.UUID) -> User:
    user = active_users(db).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_by_name_or_email(db: Session, name_or_email: str) -> User | None:
    return (
        active_users(db)
        .filter(or_(User.name == name_or_email, User.email == name_or_email))
        .first()
    )


def list_users(db: Session, params: UserListParams) -> tuple[list[User], int]:
    """Paged users; keywords match the name, is_admin restricts to admins."""
    query = active_users(db)
    if params.is_admin:
        query = query.join(Admin, Admin.user_id == User.id)
    return resolve_page(
        query,
        params,
        search_column=User.name,
        sortable=USER_SORTABLE,
        default_sort=User.created_at.asc(),
    )


def new_user(db: Session, request: SignUpRequest, settings: Settings) -> User:
    """
    Hash the password and stage a user row in the caller's transaction.

    Flushes so uniqueness violations surface here as IntegrityError; the
    caller owns commit/rollback.
    """
    user = User(
        name=request.name,
        email=str(request.email) if request.email else None,
        password_hash=hash_password(request.password, rounds=settings.BCRYPT_ROUNDS),
    )
    db.add(user)
    db.flush()
    return user


def sign_up(
    db: Session,
    settings: Settings,
    request: SignUpRequest,
    level: PermissionLevel | None = None,
) -> tuple[User, str]:
    """Create a user with ``level`` (default: the sign-up default) and return it with a token."""
    if level is None:
        level = default_level(settings)
    if settings.ENFORCE_EMAIL and not request.email:
        raise ValidationError("Email is enforced by administrator")

    try:
        user = new_user(db, request, settings)
        db.add(Permission(user_id=user.id, permission=level))
        db.flush()
        token = issue_token(user, settings)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(DUPLICATE_USER_MESSAGE) from e
    except Exception:
        db.rollback()
        raise

    logger.info("User signed up", extra={"user_id": str(user.id)})
    return get_user(db, user.id), token


def sign_in(db: Session, settings: Settings, request: SignInRequest) -> str:
    """Verify name-or-email and password; return a bearer token."""
    user = get_by_name_or_email(db, request.name_or_email.strip())
    if user is None or not verify_password(request.password, user.password_hash):
        logger.info("Rejected sign-in attempt")
        raise AuthError("Invalid credentials")
    return issue_token(user, settings)


def update_user(db: Session, user_id: uuid.UUID, request: UserUpdate) -> User:
    """Apply a partial name/email update."""
    if request.name is None and request.email is None:
        raise ValidationError("Nothing to update")

    user = get_user(db, user_id)
    if request.name is not None:
        user.name = request.name
    if request.email is not None:
        user.email = str(request.email)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(DUPLICATE_USER_MESSAGE) from e
    return get_user(db, user_id)


def change_password(
    db: Session,
    settings: Settings,
    user_id: uuid.UUID,
    request: ChangePasswordRequest,
) -> User:
    user = get_user(db, user_id)
    if not verify_password(request.old_password, user.password_hash):
        raise AuthError("Old password does not match")
    user.password_hash = hash_password(request.new_password, rounds=settings.BCRYPT_ROUNDS)
    db.commit()
    logger.info("Password changed", extra={"user_id": str(user_id)})
    return get_user(db, user_id)


def _tombstone(db: Session, user: User) -> None:
    user.deleted_at = datetime.now(UTC)
    db.flush()


def delete_user(db: Session, user_id: uuid.UUID) -> None:
    """
    Remove the user's admin and permission rows, then tombstone the user.

    All three steps commit together or not at all.
    """
    user = get_user(db, user_id)
    try:
        db.query(Admin).filter(Admin.user_id == user_id).delete(synchronize_session=False)
        db.query(Permission).filter(Permission.user_id == user_id).delete(
            synchronize_session=False
        )
        _tombstone(db, user)
        db.commit()
    except Exception:
        db.rollback()
        logger.error("User deletion rolled back", extra={"user_id": str(user_id)})
        raise
    logger.info("User deleted", extra={"user_id": str(user_id)})
