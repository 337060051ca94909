"""Bitmask permission levels and the per-user permission row."""

from enum import STRICT, Flag

from sqlalchemy import Column, ForeignKey, Integer, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator

from app.models.base import Base, TimestampMixin


class PermissionLevel(Flag, boundary=STRICT):
    """
    Global capability flags, combined with ``|``.

    Backed by an int in storage but not an int itself, so ``READ + WRITE``
    raises TypeError instead of silently producing a mask.
    """

    READ = 1
    WRITE = 2
    APPROVE = 4
    MODERATE = 8

    @classmethod
    def none(cls) -> "PermissionLevel":
        return cls(0)

    @classmethod
    def all(cls) -> "PermissionLevel":
        return cls.READ | cls.WRITE | cls.APPROVE | cls.MODERATE


class PermissionLevelType(TypeDecorator):
    """Stores PermissionLevel as its integer mask."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, PermissionLevel):
            return value.value
        return PermissionLevel(int(value)).value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return PermissionLevel(value)


class Permission(Base, TimestampMixin):
    """Capability bitmask for one user. No row means no capabilities."""

    __tablename__ = "permissions"

    user_id = Column(Uuid, ForeignKey("users.id"), primary_key=True)
    permission = Column(PermissionLevelType(), nullable=False, default=PermissionLevel(0))

    user = relationship("User", back_populates="permission")
