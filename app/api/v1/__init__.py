"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import account, auth, beats, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(beats.router, prefix="/beats", tags=["beats"])
router.include_router(account.router, tags=["account"])
