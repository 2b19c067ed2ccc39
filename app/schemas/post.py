"""Request/response schemas for posts."""

from datetime import datetime

from pydantic import Field

from app.schemas.category import CategoryResponse
from app.schemas.common import CamelInput, CamelModel
from app.schemas.user import UserResponse


class PostCreate(CamelInput):
    """New post; slug is generated from the title when omitted."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    is_published: bool = False
    category_id: int | None = None


class PostUpdate(CamelInput):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    is_published: bool | None = None
    category_id: int | None = None


class PostResponse(CamelModel):
    id: int
    title: str
    content: str
    slug: str
    is_published: bool
    author_id: int
    category_id: int | None = None
    author: UserResponse | None = None
    category: CategoryResponse | None = None
    created_at: datetime
    updated_at: datetime
