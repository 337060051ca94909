"""Durable application settings and their in-memory copy on Settings."""

import logging

from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.errors import NotFoundError
from app.models import ADMIN_CREATED_KEY, AppSetting

logger = logging.getLogger(__name__)

# Rows seeded on start-up when missing.
DEFAULT_SETTINGS: dict[str, dict[str, object]] = {
    ADMIN_CREATED_KEY: {"value_bool": False},
}


def get_all(db: Session) -> list[AppSetting]:
    return db.query(AppSetting).order_by(AppSetting.key).all()


def get_by_key(db: Session, key: str) -> AppSetting:
    setting = db.query(AppSetting).filter(AppSetting.key == key).first()
    if setting is None:
        raise NotFoundError(f"Setting {key!r} not found")
    return setting


def ensure_defaults(db: Session) -> int:
    """Insert any missing default rows. Returns the number of rows created."""
    existing = {key for (key,) in db.query(AppSetting.key).all()}
    created = 0
    for key, values in DEFAULT_SETTINGS.items():
        if key not in existing:
            db.add(AppSetting(key=key, **values))
            created += 1
    if created:
        db.commit()
        logger.info("Seeded %s default app setting(s)", created)
    return created


def set_bool(db: Session, key: str, value: bool) -> None:
    """Update a boolean setting. Raises NotFoundError if the key does not exist."""
    updated = (
        db.query(AppSetting)
        .filter(AppSetting.key == key)
        .update({AppSetting.value_bool: value}, synchronize_session=False)
    )
    if updated == 0:
        raise NotFoundError(f"Setting {key!r} not found")


def claim_admin_created(db: Session) -> bool:
    """
    Flip ADMIN_CREATED from false to true inside the caller's transaction.

    Returns False when the flag was already true (or missing). The row lock
    taken by the conditional UPDATE serializes concurrent callers, so only
    one transaction can observe True.
    """
    claimed = (
        db.query(AppSetting)
        .filter(AppSetting.key == ADMIN_CREATED_KEY, AppSetting.value_bool.is_(False))
        .update({AppSetting.value_bool: True}, synchronize_session=False)
    )
    return claimed == 1


def load_into_config(db: Session, settings: Settings) -> Settings:
    """Seed defaults and copy durable flags into the in-memory settings object."""
    ensure_defaults(db)
    settings.ADMIN_CREATED = bool(get_by_key(db, ADMIN_CREATED_KEY).value_bool)
    logger.info("Loaded app settings", extra={"admin_created": settings.ADMIN_CREATED})
    return settings


def to_public(rows: list[AppSetting]) -> dict[str, bool]:
    """Project the settings rows onto the public response fields."""
    response = {"admin_created": False}
    for row in rows:
        if row.key == ADMIN_CREATED_KEY:
            response["admin_created"] = bool(row.value_bool)
    return response
