"""User administration endpoints (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.api.v1.deps import AdminIdentity, Pagination, get_user_store
from app.schemas.common import PaginatedResponse
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.users import UserStore

router = APIRouter()

Users = Annotated[UserStore, Depends(get_user_store)]


@router.get("", response_model=PaginatedResponse[UserResponse])
def list_users(
    _admin: AdminIdentity,
    users: Users,
    pagination: Pagination,
) -> PaginatedResponse[UserResponse]:
    items, total = users.list_page(pagination.offset, pagination.limit)
    return PaginatedResponse[UserResponse].build(
        [UserResponse.model_validate(u) for u in items], total, pagination
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, _admin: AdminIdentity, users: Users) -> UserResponse:
    return UserResponse.model_validate(users.get(user_id))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreate, _admin: AdminIdentity, users: Users) -> UserResponse:
    """Create a user with any role. 409 if the username or email is taken."""
    return UserResponse.model_validate(users.create(body))


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    body: UserUpdate,
    _admin: AdminIdentity,
    users: Users,
) -> UserResponse:
    """Partial update; a new password is rehashed. Existing tokens stay valid until expiry."""
    return UserResponse.model_validate(users.update(user_id, body))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, _admin: AdminIdentity, users: Users) -> Response:
    """Soft delete; the user can no longer log in or refresh."""
    users.remove(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
