"""ORM models for the tag taxonomy: categories and the tags inside them."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import declared_attr, relationship

from app.models.base import Base, TimestampMixin


class AuditMixin(TimestampMixin):
    """Soft delete plus created/updated/deleted-by user references."""

    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    @declared_attr
    def created_by_id(cls):
        return Column(Uuid, ForeignKey("users.id"), nullable=True)

    @declared_attr
    def updated_by_id(cls):
        return Column(Uuid, ForeignKey("users.id"), nullable=True)

    @declared_attr
    def deleted_by_id(cls):
        return Column(Uuid, ForeignKey("users.id"), nullable=True)

    @declared_attr
    def created_by(cls):
        return relationship("User", foreign_keys=f"{cls.__name__}.created_by_id")

    @declared_attr
    def updated_by(cls):
        return relationship("User", foreign_keys=f"{cls.__name__}.updated_by_id")

    @declared_attr
    def deleted_by(cls):
        return relationship("User", foreign_keys=f"{cls.__name__}.deleted_by_id")


class TagCategory(Base, AuditMixin):
    __tablename__ = "tag_categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False, default="")


class Tag(Base, AuditMixin):
    """A tag is unique by (slug, category)."""

    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("slug", "category_id", name="uq_tags_slug_category"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slug = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False, default="")
    category_id = Column(Uuid, ForeignKey("tag_categories.id"), nullable=False, index=True)

    category = relationship("TagCategory")
