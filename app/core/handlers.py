"""
Exception handlers: every error response uses one JSON shape.

    {
      "statusCode": 404,
      "message": "Post with id 999 not found",
      "error": "Not Found",
      "path": "/api/v1/posts/999",
      "timestamp": "2026-02-06T12:00:00.000000+00:00"
    }
"""

import logging
from datetime import UTC, datetime
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AppError

logger = logging.getLogger(__name__)


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def error_response(
    request: Request,
    status_code: int,
    message: Any,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the error body and log it: 5xx at ERROR (by the caller), 4xx at WARNING."""
    if status_code < 500:
        logger.warning("%s %s %s", request.method, request.url.path, status_code)
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer", **(headers or {})}
    body = {
        "statusCode": status_code,
        "message": message,
        "error": _reason(status_code),
        "path": request.url.path,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(request, exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if exc.detail is not None else _reason(exc.status_code)
    return error_response(request, exc.status_code, message, getattr(exc, "headers", None))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Invalid or unknown fields are a 400 with one message per offending field."""
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return error_response(request, status.HTTP_400_BAD_REQUEST, messages)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "%s %s %s",
        request.method,
        request.url.path,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        exc_info=exc,
    )
    return error_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
