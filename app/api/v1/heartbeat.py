"""Heartbeat endpoints, including one per guard so access rules can be probed."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin, require_permission
from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.models import PermissionLevel
from app.schemas.common import Envelope
from app.schemas.health import HealthResponse

router = APIRouter()

# Guarded probes: path -> dependency
GUARDED_PROBES = {
    "/admin-only": require_admin,
    "/moderator": require_permission(PermissionLevel.MODERATE),
    "/approver": require_permission(PermissionLevel.APPROVE),
    "/read-write": require_permission(PermissionLevel.READ | PermissionLevel.WRITE),
    "/write-only": require_permission(PermissionLevel.WRITE),
    "/read-only": require_permission(PermissionLevel.READ),
}


def ok() -> Envelope[str]:
    return Envelope(data="OK")


@router.get("", response_model=Envelope[str])
def heartbeat() -> Envelope[str]:
    return ok()


@router.get("/db", response_model=Envelope[HealthResponse])
def heartbeat_db(db: Annotated[Session, Depends(get_db)]) -> Envelope[HealthResponse]:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    return Envelope(
        data=HealthResponse(status="ok", environment=settings.APP_ENV, database=db_status)
    )


for _path, _guard in GUARDED_PROBES.items():
    router.add_api_route(
        _path,
        ok,
        methods=["GET"],
        response_model=Envelope[str],
        dependencies=[Depends(_guard)],
    )
