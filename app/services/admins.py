"""Admin registry: role membership and the one-time first-admin bootstrap."""

import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.errors import ConflictError, ForbiddenError, NotFoundError
from app.models import ADMIN_CREATED_KEY, Admin, Permission, PermissionLevel, User
from app.schemas.admin import AdminResponse
from app.schemas.user import SignUpRequest, UserListParams
from app.services import accounts, app_settings

logger = logging.getLogger(__name__)

ADMIN_ALREADY_CREATED = "Admin already created"


def to_response(admin: Admin) -> AdminResponse:
    return AdminResponse(
        admin_id=admin.id,
        user_id=admin.user_id,
        created_at=admin.created_at,
        updated_at=admin.updated_at,
    )


def is_admin(db: Session, user_id: uuid.UUID) -> bool:
    """Existence check; a missing row (or a deleted user) is simply False."""
    return (
        db.query(Admin.id)
        .join(User, User.id == Admin.user_id)
        .filter(Admin.user_id == user_id, User.deleted_at.is_(None))
        .first()
        is not None
    )


def count_admins(db: Session) -> int:
    return db.query(Admin).count()


def list_admins(db: Session, params: UserListParams) -> tuple[list[User], int]:
    return accounts.list_users(db, params.model_copy(update={"is_admin": True}))


def assign_admin(db: Session, user_id: uuid.UUID) -> Admin:
    """Grant the admin role. A second grant for the same user is a ConflictError."""
    accounts.get_user(db, user_id)
    admin = Admin(user_id=user_id)
    db.add(admin)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Already an admin") from e
    logger.info("Admin assigned", extra={"user_id": str(user_id)})
    return admin


def remove_admin(db: Session, user_id: uuid.UUID) -> AdminResponse:
    """Revoke the admin role (hard delete). NotFoundError when the user is not an admin."""
    admin = db.query(Admin).filter(Admin.user_id == user_id).first()
    if admin is None:
        raise NotFoundError("Admin not found")
    removed = to_response(admin)
    db.delete(admin)
    db.commit()
    logger.info("Admin removed", extra={"user_id": str(user_id)})
    return removed


def _stage_admin_user(
    db: Session,
    settings: Settings,
    request: SignUpRequest,
) -> tuple[User, str]:
    """Stage user + admin row + full permissions and issue a token; no commit."""
    user = accounts.new_user(db, request, settings)
    db.add(Admin(user_id=user.id))
    db.add(Permission(user_id=user.id, permission=PermissionLevel.all()))
    db.flush()
    token = accounts.issue_token(user, settings)
    return user, token


def create_admin(db: Session, settings: Settings, request: SignUpRequest) -> tuple[User, str]:
    """
    Create a new user who is an admin from the start (caller is already an admin).

    Also marks the bootstrap flag if it was still unset, in the same transaction.
    """
    app_settings.ensure_defaults(db)
    try:
        user, token = _stage_admin_user(db, settings, request)
        if not settings.ADMIN_CREATED:
            app_settings.set_bool(db, ADMIN_CREATED_KEY, True)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(accounts.DUPLICATE_USER_MESSAGE) from e
    except Exception:
        db.rollback()
        raise

    settings.ADMIN_CREATED = True
    logger.info("Admin user created", extra={"user_id": str(user.id)})
    return accounts.get_user(db, user.id), token


def create_initial_admin(
    db: Session,
    settings: Settings,
    request: SignUpRequest,
) -> tuple[User, str]:
    """
    Bootstrap the very first admin, exactly once.

    The in-memory ADMIN_CREATED flag is only a hint. Existing admin rows
    (drift after a lost flag) reconcile the flag and reject. Otherwise the
    durable flag is claimed with a conditional update and the user, admin
    row, permissions and token are produced in the same transaction; any
    failure rolls all of it back.
    """
    if settings.ADMIN_CREATED:
        raise ForbiddenError(ADMIN_ALREADY_CREATED)

    app_settings.ensure_defaults(db)

    if count_admins(db) > 0:
        logger.warning("Admin exists, but ADMIN_CREATED is false. Updating ADMIN_CREATED to true")
        try:
            app_settings.set_bool(db, ADMIN_CREATED_KEY, True)
            db.commit()
        except Exception:
            db.rollback()
            raise
        settings.ADMIN_CREATED = True
        raise ForbiddenError(ADMIN_ALREADY_CREATED)

    try:
        if not app_settings.claim_admin_created(db):
            raise ForbiddenError(ADMIN_ALREADY_CREATED)
        user, token = _stage_admin_user(db, settings, request)
        db.commit()
    except ForbiddenError:
        db.rollback()
        settings.ADMIN_CREATED = True
        logger.warning("Initial admin bootstrap lost the race; flag already claimed")
        raise
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(accounts.DUPLICATE_USER_MESSAGE) from e
    except Exception:
        db.rollback()
        logger.error("Initial admin bootstrap rolled back")
        raise

    settings.ADMIN_CREATED = True
    logger.info("Initial admin created", extra={"user_id": str(user.id)})
    return accounts.get_user(db, user.id), token
