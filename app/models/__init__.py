"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.permission import Permission, PermissionLevel
from app.models.setting import ADMIN_CREATED_KEY, AppSetting
from app.models.tag import Tag, TagCategory
from app.models.user import Admin, User

__all__ = [
    "ADMIN_CREATED_KEY",
    "Admin",
    "AppSetting",
    "Base",
    "Permission",
    "PermissionLevel",
    "Tag",
    "TagCategory",
    "User",
]
