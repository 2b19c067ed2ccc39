"""Request/response schemas for categories."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelInput, CamelModel


class CategoryCreate(CamelInput):
    name: str = Field(..., min_length=1, max_length=100, description="Category name (unique)")
    description: str | None = None
    is_active: bool = True


class CategoryUpdate(CamelInput):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    is_active: bool | None = None


class CategoryResponse(CamelModel):
    id: int
    name: str
    description: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
