"""ORM model for durable key/typed-value application settings."""

from sqlalchemy import Boolean, Column, Float, Integer, String, Text, false

from app.models.base import Base, TimestampMixin

# Durable "first admin has been bootstrapped" flag.
ADMIN_CREATED_KEY = "ADMIN_CREATED"


class AppSetting(Base, TimestampMixin):
    """One setting per key; only the value column matching its type is meaningful."""

    __tablename__ = "app_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(255), nullable=False, unique=True, index=True)
    value_bool = Column(Boolean, nullable=False, default=False, server_default=false())
    value_integer = Column(Integer, nullable=False, default=0, server_default="0")
    value_float = Column(Float, nullable=False, default=0.0, server_default="0")
    value_string = Column(Text, nullable=False, default="", server_default="")
