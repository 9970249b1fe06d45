"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import access, auth, health, items, profile

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(items.router, prefix="/items", tags=["items"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
router.include_router(access.router, prefix="/test", tags=["test"])
