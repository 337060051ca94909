"""ORM models for user accounts and administrative role membership."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """
    User account: identity anchor for tokens, permissions and admin role.

    deleted_at is a tombstone; tombstoned users are excluded from normal queries.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=True, unique=True)
    password_hash = Column(String(255), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    admin = relationship("Admin", back_populates="user", uselist=False)
    permission = relationship("Permission", back_populates="user", uselist=False)

    @property
    def is_admin(self) -> bool:
        return self.admin is not None


class Admin(Base, TimestampMixin):
    """Administrative role membership: at most one row per user."""

    __tablename__ = "admins"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, unique=True)

    user = relationship("User", back_populates="admin")
