"""
Sign-in, token-pair generation and refresh-token exchange.

Tokens carry no server-side state: a refresh returns a brand new pair and the
old refresh token simply expires on its own.
"""

import asyncio
import logging
from functools import lru_cache
from typing import Protocol

import jwt

from app.core.errors import UnauthorizedError
from app.core.security import TokenSigner, hash_password, verify_password
from app.models import User
from app.schemas.auth import AuthTokens

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_REFRESH_TOKEN = "Invalid or expired refresh token"


@lru_cache
def dummy_password_hash() -> str:
    """Hash checked when the username is unknown, so both failures cost one bcrypt round."""
    return hash_password("not-a-real-password")


def _password_matches(password: str, stored_hash: str | None) -> bool:
    if stored_hash is None:
        verify_password(password, dummy_password_hash())
        return False
    return verify_password(password, stored_hash)


class CredentialStore(Protocol):
    """The user lookups the auth core needs (implemented by app.services.users.UserStore)."""

    def find_by_username(self, username: str) -> User | None: ...

    def find_by_id(self, user_id: int) -> User | None: ...


class AuthService:
    def __init__(self, users: CredentialStore, signer: TokenSigner) -> None:
        self.users = users
        self.signer = signer

    async def sign_in(self, username: str, password: str) -> AuthTokens:
        """
        Verify username/password and return a fresh token pair.

        Unknown user, wrong password and inactive account all raise the same
        UnauthorizedError so callers cannot tell which one happened.
        """
        user = await asyncio.to_thread(self.users.find_by_username, username)
        stored_hash = user.password_hash if user is not None else None
        if not await asyncio.to_thread(_password_matches, password, stored_hash):
            logger.warning("Failed login attempt for username=%s", username)
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not user.is_active:
            logger.warning("Login rejected for inactive user username=%s", username)
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return await self.generate_tokens(user.id, user.username, user.role)

    async def refresh_tokens(self, refresh_token: str) -> AuthTokens:
        """
        Exchange a valid refresh token for a new pair.

        The token must verify against the refresh secret, and its user must still
        exist and be active.
        """
        try:
            payload = self.signer.verify_refresh(refresh_token)
            user_id = int(payload["sub"])
        except (jwt.PyJWTError, KeyError, TypeError, ValueError) as e:
            logger.warning("Refresh token rejected: %s", e)
            raise UnauthorizedError(INVALID_REFRESH_TOKEN) from e

        user = await asyncio.to_thread(self.users.find_by_id, user_id)
        if user is None or not user.is_active:
            logger.warning("Refresh rejected for missing or inactive user id=%s", user_id)
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)
        return await self.generate_tokens(user.id, user.username, user.role)

    async def generate_tokens(self, user_id: int, username: str, role: str) -> AuthTokens:
        """Sign the same claims with the access and refresh configurations concurrently."""
        claims = {"sub": user_id, "username": username, "role": role}
        # gather propagates the first failure; no partial pair is returned.
        access_token, refresh_token = await asyncio.gather(
            asyncio.to_thread(self.signer.sign_access, claims),
            asyncio.to_thread(self.signer.sign_refresh, claims),
        )
        return AuthTokens(access_token=access_token, refresh_token=refresh_token)
