"""Shared FastAPI dependencies: stores, token signer, auth service and guards."""

from collections.abc import Callable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.guards import authenticate, authorize
from app.core.security import TokenConfig, TokenSigner
from app.schemas.auth import Identity
from app.schemas.common import PaginationParams
from app.services.auth import AuthService
from app.services.categories import CategoryStore
from app.services.posts import PostStore
from app.services.users import UserStore

# Raw header value; the "Bearer " prefix is checked in authenticate().
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


@lru_cache
def get_token_signer() -> TokenSigner:
    """Signer built once from settings; override in tests via app.dependency_overrides."""
    return TokenSigner(TokenConfig.from_settings(get_settings()))


def get_user_store(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserStore:
    return UserStore(db, bcrypt_rounds=settings.BCRYPT_ROUNDS)


def get_category_store(db: Annotated[Session, Depends(get_db)]) -> CategoryStore:
    return CategoryStore(db)


def get_post_store(db: Annotated[Session, Depends(get_db)]) -> PostStore:
    return PostStore(db)


def get_auth_service(
    users: Annotated[UserStore, Depends(get_user_store)],
    signer: Annotated[TokenSigner, Depends(get_token_signer)],
) -> AuthService:
    return AuthService(users, signer)


def get_identity(
    authorization: Annotated[str | None, Depends(authorization_header)],
    signer: Annotated[TokenSigner, Depends(get_token_signer)],
) -> Identity:
    """Access guard: require a valid Bearer access token and return its identity."""
    return authenticate(authorization, signer)


def require_roles(*roles: str) -> Callable[[Identity], Identity]:
    """Role guard factory; runs after the access guard and passes the identity through."""

    def dependency(identity: Annotated[Identity, Depends(get_identity)]) -> Identity:
        authorize(identity, roles)
        return identity

    return dependency


require_admin = require_roles("admin")

CurrentIdentity = Annotated[Identity, Depends(get_identity)]
AdminIdentity = Annotated[Identity, Depends(require_admin)]
Pagination = Annotated[PaginationParams, Query()]
