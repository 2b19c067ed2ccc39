"""
Request authorization primitives, independent of FastAPI.

authenticate turns an Authorization header into an Identity, authorize checks the
identity's role, and ensure_owner_or_admin gates mutation of an owned resource.
The FastAPI dependencies in app.api.v1.deps compose them in that order.
"""

import logging
from collections.abc import Callable, Collection
from typing import Any

import jwt
from pydantic import ValidationError

from app.core.errors import ForbiddenError, UnauthorizedError
from app.core.security import TokenSigner
from app.schemas.auth import Identity

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

TOKEN_NOT_PROVIDED = "Token not provided"
INVALID_TOKEN = "Invalid or expired token"
INSUFFICIENT_PERMISSIONS = "Insufficient permissions"
NOT_OWNER = "You can only modify or delete your own posts"


def authenticate(authorization: str | None, signer: TokenSigner) -> Identity:
    """
    Verify a `Bearer <token>` header against the access secret and return its claims.

    No database lookup: the claims are trusted until the token expires.
    """
    if not authorization:
        raise UnauthorizedError(TOKEN_NOT_PROVIDED)
    # Scheme match is exact and case-sensitive.
    if not authorization.startswith(BEARER_PREFIX):
        raise UnauthorizedError(INVALID_TOKEN)
    token = authorization[len(BEARER_PREFIX):]
    if not token:
        raise UnauthorizedError(TOKEN_NOT_PROVIDED)
    try:
        payload: dict[str, Any] = signer.verify_access(token)
        return Identity.model_validate(payload)
    except (jwt.PyJWTError, ValidationError) as e:
        logger.debug("Access token rejected: %s", e)
        raise UnauthorizedError(INVALID_TOKEN) from e


def authorize(identity: Identity | None, required_roles: Collection[str] | None) -> bool:
    """
    Allow when no roles are required; otherwise the identity's role must be one of them.

    Raises ForbiddenError, including when there is no identity or it has no role.
    """
    if not required_roles:
        return True
    if identity is None or not identity.role:
        raise ForbiddenError(INSUFFICIENT_PERMISSIONS)
    if identity.role not in required_roles:
        raise ForbiddenError(INSUFFICIENT_PERMISSIONS)
    return True


def is_owner_or_admin(resource_author_id: int, identity: Identity) -> bool:
    return identity.is_admin or resource_author_id == identity.sub


def ensure_owner_or_admin(
    resource_id: int,
    identity: Identity,
    fetch_author_id: Callable[[int], int],
) -> None:
    """
    Admins pass without a lookup. Anyone else triggers fetch_author_id (which raises
    NotFoundError for a missing resource) and must be the author, else ForbiddenError.
    """
    if identity.is_admin:
        return
    if not is_owner_or_admin(fetch_author_id(resource_id), identity):
        raise ForbiddenError(NOT_OWNER)
