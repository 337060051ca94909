"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import admin, heartbeat, settings, tags, users

router = APIRouter()
router.include_router(heartbeat.router, prefix="/heartbeat", tags=["heartbeat"])
router.include_router(settings.router, prefix="/settings", tags=["settings"])
router.include_router(users.user_router, prefix="/user", tags=["user"])
router.include_router(users.users_router, prefix="/users", tags=["users"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(tags.categories_router, prefix="/tag-categories", tags=["tag-categories"])
router.include_router(tags.tags_router, prefix="/tags", tags=["tags"])
