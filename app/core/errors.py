"""Domain errors raised by services and guards; mapped to HTTP responses in app.core.handlers."""


class AppError(Exception):
    """Base error with an HTTP status and a client-safe message."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    status_code = 400


class UnauthorizedError(AppError):
    """Missing, malformed, expired or otherwise invalid credentials or tokens."""

    status_code = 401


class ForbiddenError(AppError):
    """Valid identity without the required role or ownership."""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Uniqueness violation (username, email, category name, post slug)."""

    status_code = 409
