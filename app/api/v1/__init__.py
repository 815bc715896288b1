"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, feeds, health, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/auth", tags=["users"])
router.include_router(feeds.router, prefix="/feeds", tags=["feeds"])
