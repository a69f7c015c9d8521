"""
Hotel Listings Backend — Access Log Middleware
===============================================

What:  One access-log line per HTTP request on the "listings.access" logger.
How:   Times the downstream call; records method, path, status, elapsed time,
       declared request size (uploads dominate it), and the request ID.
Who:   Applied to every request except /health, which probes hit constantly.

Example line:
    ... [INFO] [3fa2c1d0] listings.access: POST /images 200 38.4ms 1048213B

Request bodies and uploaded file contents are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from listings.middleware.request_id import request_id_var

logger = logging.getLogger("listings.access")

_QUIET_PATHS = frozenset({"/health"})


def level_for_status(status_code: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in _QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        declared = request.headers.get("content-length", "")
        body_bytes = int(declared) if declared.isdigit() else 0
        rid = request_id_var.get("")
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms %dB",
            request.method,
            path,
            response.status_code,
            elapsed_ms,
            body_bytes,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "body_bytes": body_bytes,
                "client": request.client.host if request.client else None,
            },
        )
        return response
