"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=4, max_length=128, description="Password")


class RefreshRequest(BaseModel):
    """Refresh token received during login or a previous refresh."""

    model_config = ConfigDict(extra="forbid")

    refresh_token: str = Field(..., min_length=1, description="Refresh token")


class AuthTokens(BaseModel):
    """Access/refresh token pair returned by login and refresh."""

    access_token: str = Field(..., description="Short-lived JWT for the Authorization header")
    refresh_token: str = Field(..., description="Long-lived JWT exchanged at /auth/refresh")


class Identity(BaseModel):
    """
    Decoded access-token claims for the current request.

    Immutable; produced by the access guard and passed to downstream dependencies.
    role is None only for tokens issued without a role claim.
    """

    model_config = ConfigDict(frozen=True)

    sub: int
    username: str
    role: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
