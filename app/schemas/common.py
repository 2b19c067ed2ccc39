"""Shared schema base classes and pagination envelopes."""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class CamelModel(BaseModel):
    """Response/request model serialized with camelCase keys (isActive, createdAt)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CamelInput(CamelModel):
    """Request body: camelCase or snake_case keys; unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")


class PaginationParams(BaseModel):
    """Query parameters for paginated list endpoints."""

    page: int = Field(default=1, ge=1, description="Page number (1-based)")
    limit: int = Field(
        default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page"
    )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginatedResponse(CamelModel, Generic[T]):
    """Page of items plus totals: {data, total, page, limit, totalPages}."""

    data: list[T]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, items: list, total: int, params: PaginationParams) -> "PaginatedResponse[T]":
        return cls(
            data=items,
            total=total,
            page=params.page,
            limit=params.limit,
            total_pages=math.ceil(total / params.limit),
        )
