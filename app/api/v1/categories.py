"""Category endpoints: public reads, admin-only writes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.api.v1.deps import AdminIdentity, Pagination, get_category_store
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.schemas.common import PaginatedResponse
from app.services.categories import CategoryStore

router = APIRouter()

Categories = Annotated[CategoryStore, Depends(get_category_store)]


@router.get("", response_model=PaginatedResponse[CategoryResponse])
def list_categories(
    categories: Categories,
    pagination: Pagination,
) -> PaginatedResponse[CategoryResponse]:
    items, total = categories.list_page(pagination.offset, pagination.limit)
    return PaginatedResponse[CategoryResponse].build(
        [CategoryResponse.model_validate(c) for c in items], total, pagination
    )


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, categories: Categories) -> CategoryResponse:
    return CategoryResponse.model_validate(categories.get(category_id))


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    _admin: AdminIdentity,
    categories: Categories,
) -> CategoryResponse:
    return CategoryResponse.model_validate(categories.create(body))


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    body: CategoryUpdate,
    _admin: AdminIdentity,
    categories: Categories,
) -> CategoryResponse:
    return CategoryResponse.model_validate(categories.update(category_id, body))


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    _admin: AdminIdentity,
    categories: Categories,
) -> Response:
    categories.remove(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
