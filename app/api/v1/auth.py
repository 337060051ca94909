"""Authorization dependencies: bearer identity, permission guard and admin guard."""

import logging
import uuid
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import AuthError, NotFoundError
from app.core.security import get_user_id
from app.models import PermissionLevel
from app.services import accounts, admins, permissions

logger = logging.getLogger(__name__)

UNAUTHORIZED = "Unauthorized"


def get_current_user_id(
    settings: Annotated[Settings, Depends(get_settings)],
    db: Annotated[Session, Depends(get_db)],
    authorization: Annotated[str | None, Header()] = None,
) -> uuid.UUID:
    """Dependency: resolve the caller from the raw Authorization header. Raises 401."""
    try:
        user_id = get_user_id(authorization, settings.JWT_SECRET.get_secret_value())
    except AuthError as e:
        logger.info("Rejected bearer token: %s", e.message)
        raise AuthError(UNAUTHORIZED) from e
    # Tokens outlive account deletion.
    if not accounts.is_active(db, user_id):
        logger.info("Bearer token for inactive user", extra={"user_id": str(user_id)})
        raise AuthError(UNAUTHORIZED)
    return user_id


def permission_allows(db: Session, user_id: uuid.UUID, required: PermissionLevel) -> bool:
    """True when the user's stored bitmask shares any bit with ``required``."""
    try:
        row = permissions.get_by_user_id(db, user_id)
    except NotFoundError:
        return False
    return permissions.has_capability(row.permission, required)


def require_permission(required: PermissionLevel) -> Callable[..., uuid.UUID]:
    """Dependency factory: caller must hold at least one bit of ``required``. Raises 401."""

    def guard(
        user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
        db: Annotated[Session, Depends(get_db)],
    ) -> uuid.UUID:
        if not permission_allows(db, user_id, required):
            logger.info(
                "Permission denied",
                extra={"user_id": str(user_id), "required": required.value},
            )
            raise AuthError(UNAUTHORIZED)
        return user_id

    return guard


def require_admin(
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
) -> uuid.UUID:
    """Dependency: caller must hold an admin row. Raises 401 (not 403) for non-admins."""
    if not admins.is_admin(db, user_id):
        logger.info("Admin access denied", extra={"user_id": str(user_id)})
        raise AuthError(UNAUTHORIZED)
    return user_id


CurrentUserID = Annotated[uuid.UUID, Depends(get_current_user_id)]
AdminUserID = Annotated[uuid.UUID, Depends(require_admin)]
