"""Pydantic request/response schemas."""

from app.schemas.auth import AuthTokens, Identity, LoginRequest, RefreshRequest
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.schemas.common import PaginatedResponse, PaginationParams
from app.schemas.health import HealthResponse
from app.schemas.post import PostCreate, PostResponse, PostUpdate
from app.schemas.user import (
    RegisterRequest,
    UserCreate,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "AuthTokens",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "PaginatedResponse",
    "PaginationParams",
    "PostCreate",
    "PostResponse",
    "PostUpdate",
    "RefreshRequest",
    "RegisterRequest",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]
