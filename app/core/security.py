"""Password hashing and JWT signing/verification for authentication."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from app.core.config import parse_duration

if TYPE_CHECKING:
    from app.core.config import Settings

# Appended to the access secret when no dedicated refresh secret is configured.
REFRESH_SECRET_SUFFIX = "-refresh"

DEFAULT_BCRYPT_ROUNDS = 10


def hash_password(plain_password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def derive_refresh_secret(access_secret: str, refresh_secret: str | None) -> str:
    """Return the configured refresh secret, or the access secret plus REFRESH_SECRET_SUFFIX."""
    if refresh_secret is not None:
        return refresh_secret
    return access_secret + REFRESH_SECRET_SUFFIX


@dataclass(frozen=True)
class TokenConfig:
    """Signing configuration for the access/refresh token pair."""

    access_secret: str
    refresh_secret: str
    access_expires_in: int = 3600
    refresh_expires_in: int = 7 * 86400
    algorithm: str = "HS256"

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenConfig":
        access_secret = settings.JWT_SECRET.get_secret_value()
        explicit = (
            settings.JWT_REFRESH_SECRET.get_secret_value()
            if settings.JWT_REFRESH_SECRET is not None
            else None
        )
        return cls(
            access_secret=access_secret,
            refresh_secret=derive_refresh_secret(access_secret, explicit),
            access_expires_in=parse_duration(settings.JWT_EXPIRATION),
            refresh_expires_in=parse_duration(settings.JWT_REFRESH_EXPIRATION),
            algorithm=settings.JWT_ALGORITHM,
        )


class TokenSigner:
    """
    Signs and verifies JWTs with two independent configurations.

    Access tokens use access_secret/access_expires_in, refresh tokens use
    refresh_secret/refresh_expires_in. Verification errors are jwt.PyJWTError.
    """

    def __init__(self, config: TokenConfig) -> None:
        self.config = config

    def _sign(self, claims: dict[str, Any], secret: str, expires_in: int) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            **claims,
            # PyJWT requires sub to be a string.
            "sub": str(claims["sub"]),
            "iat": now,
            "exp": now + timedelta(seconds=expires_in),
        }
        return jwt.encode(payload, secret, algorithm=self.config.algorithm)

    def _verify(self, token: str, secret: str) -> dict[str, Any]:
        return jwt.decode(
            token,
            secret,
            algorithms=[self.config.algorithm],
            options={"require": ["sub", "exp"]},
        )

    def sign_access(self, claims: dict[str, Any]) -> str:
        return self._sign(claims, self.config.access_secret, self.config.access_expires_in)

    def sign_refresh(self, claims: dict[str, Any]) -> str:
        return self._sign(claims, self.config.refresh_secret, self.config.refresh_expires_in)

    def verify_access(self, token: str) -> dict[str, Any]:
        """Decode and validate an access token. Raises jwt.PyJWTError on invalid or expired token."""
        return self._verify(token, self.config.access_secret)

    def verify_refresh(self, token: str) -> dict[str, Any]:
        """Decode and validate a refresh token. Raises jwt.PyJWTError on invalid or expired token."""
        return self._verify(token, self.config.refresh_secret)
