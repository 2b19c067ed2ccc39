"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, categories, health, posts, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
