"""Request/response schemas for users."""

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field

from app.schemas.common import CamelInput, CamelModel

Role = Literal["user", "admin"]


class RegisterRequest(CamelInput):
    """Public sign-up body; role and active flag are not accepted here."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., max_length=150)
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)


class UserCreate(RegisterRequest):
    """Admin user creation."""

    role: Role = "user"
    is_active: bool = True


class UserUpdate(CamelInput):
    """Partial update; a new password is rehashed before storage."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = Field(default=None, max_length=150)
    username: str | None = Field(default=None, min_length=3, max_length=50)
    password: str | None = Field(default=None, min_length=6, max_length=128)
    role: Role | None = None
    is_active: bool | None = None


class UserResponse(CamelModel):
    """User as returned by the API (no password hash, no deleted_at)."""

    id: int
    name: str
    email: str
    username: str
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
