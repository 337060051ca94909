"""Schemas for public application settings."""

from pydantic import BaseModel, Field


class AppSettingsResponse(BaseModel):
    admin_created: bool = Field(default=False, description="Whether the first admin was bootstrapped")
