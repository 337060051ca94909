"""Permission model: capability evaluation and per-user bitmask storage."""

import logging
import uuid

from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.errors import NotFoundError, ValidationError
from app.models import Permission, PermissionLevel, User

logger = logging.getLogger(__name__)


def from_mask(mask: int) -> PermissionLevel:
    """Build a PermissionLevel from an integer mask; unknown bits are rejected."""
    if isinstance(mask, int) and mask < 0:
        raise ValidationError(f"Invalid permission level: {mask!r}")
    try:
        return PermissionLevel(mask)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Invalid permission level: {mask!r}") from e


def has_capability(user_level: PermissionLevel | int, required: PermissionLevel | int) -> bool:
    """Any overlapping bit grants access: a READ|WRITE route accepts a WRITE-only user."""
    user_mask = user_level.value if isinstance(user_level, PermissionLevel) else int(user_level)
    required_mask = required.value if isinstance(required, PermissionLevel) else int(required)
    return (user_mask & required_mask) != 0


def default_level(settings: Settings) -> PermissionLevel:
    """Sign-up default: READ while email verification is enforced, else WRITE|READ."""
    if settings.ENFORCE_EMAIL:
        return PermissionLevel.READ
    return PermissionLevel.WRITE | PermissionLevel.READ


def get_by_user_id(db: Session, user_id: uuid.UUID) -> Permission:
    permission = db.query(Permission).filter(Permission.user_id == user_id).first()
    if permission is None:
        raise NotFoundError("Permission not found")
    return permission


def set_permission(db: Session, user_id: uuid.UUID, level: PermissionLevel) -> Permission:
    """
    Upsert a user's bitmask: update in place, or insert when no row exists.

    Raises NotFoundError if the user does not exist or was deleted.
    """
    user = (
        db.query(User)
        .filter(User.id == user_id, User.deleted_at.is_(None))
        .first()
    )
    if user is None:
        raise NotFoundError("User not found")

    updated = (
        db.query(Permission)
        .filter(Permission.user_id == user_id)
        .update({Permission.permission: level}, synchronize_session=False)
    )
    if updated == 0:
        db.add(Permission(user_id=user_id, permission=level))
    db.commit()

    logger.info(
        "Permission set",
        extra={"user_id": str(user_id), "permission": level.value, "inserted": updated == 0},
    )
    return get_by_user_id(db, user_id)
