"""Registration, JWT login/refresh and the current user's profile."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.deps import CurrentIdentity, get_auth_service, get_user_store
from app.core.errors import UnauthorizedError
from app.schemas.auth import AuthTokens, LoginRequest, RefreshRequest
from app.schemas.user import RegisterRequest, UserResponse
from app.services.auth import AuthService
from app.services.users import UserStore

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    users: Annotated[UserStore, Depends(get_user_store)],
) -> UserResponse:
    """Create an account with role 'user'. 409 if the username or email is taken."""
    return UserResponse.model_validate(users.create(body))


@router.post("/login", response_model=AuthTokens)
async def login(
    body: LoginRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthTokens:
    """
    Authenticate with username and password; returns an access/refresh token pair.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    return await auth.sign_in(body.username, body.password)


@router.post("/refresh", response_model=AuthTokens)
async def refresh(
    body: RefreshRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthTokens:
    """Exchange a refresh token for a new token pair."""
    return await auth.refresh_tokens(body.refresh_token)


@router.get("/profile", response_model=UserResponse)
def get_profile(
    identity: CurrentIdentity,
    users: Annotated[UserStore, Depends(get_user_store)],
) -> UserResponse:
    """Full profile of the user behind the access token."""
    user = users.find_by_id(identity.sub)
    if user is None:
        raise UnauthorizedError("User not found")
    return UserResponse.model_validate(user)
