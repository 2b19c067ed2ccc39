"""HTTP middleware: correlation id propagation and request logging."""

import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, Response

from app.core.logging_config import REQUEST_ID_HEADER, request_id_var

logger = logging.getLogger(__name__)


async def request_context_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """
    Keep the client's X-Request-Id (or generate a UUID4), expose it to log records
    and echo it back; log one line per request with status and elapsed time.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    token = request_id_var.set(request_id)
    request.state.request_id = request_id
    start = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s - %s (%.0fms)",
            request.method,
            request.url.path,
            status_code,
            elapsed_ms,
        )
        request_id_var.reset(token)
