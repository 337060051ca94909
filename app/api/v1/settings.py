"""Public application settings."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import Envelope
from app.schemas.settings import AppSettingsResponse
from app.services import app_settings

router = APIRouter()


@router.get("", response_model=Envelope[AppSettingsResponse])
def get_settings_public(db: Annotated[Session, Depends(get_db)]) -> Envelope[AppSettingsResponse]:
    """Expose whether the bootstrap admin has been created."""
    rows = app_settings.get_all(db)
    return Envelope(data=AppSettingsResponse(**app_settings.to_public(rows)))
