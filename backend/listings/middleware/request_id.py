"""
Hotel Listings Backend — Request Correlation IDs
=================================================

What:  Tags every request with a short correlation ID, returned in X-Request-ID
       and stamped on every log record emitted while the request runs.
How:   RequestIDMiddleware picks the ID; RequestIDLogFilter copies it from a
       ContextVar onto log records so the log format can print it.
Who:   Middleware applied to every request; filter installed by setup_logging().

Client IDs:
    A client may send its own X-Request-ID (e.g. to correlate a failed upload
    with its own logs). It is reused only if it is 1-64 characters of
    [A-Za-z0-9._-]; anything else is replaced, so header values never inject
    spaces or control characters into log lines.
"""

import logging
import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def choose_request_id(client_value) -> str:
    """Reuse a well-formed client ID, otherwise generate one."""
    if client_value and _CLIENT_ID_PATTERN.match(client_value):
        return client_value
    return new_request_id()


class RequestIDLogFilter(logging.Filter):
    """
    Adds `request_id` to every record ("-" outside a request).

    Records that already carry one (the access log passes it via `extra`)
    keep their own value.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get() or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = choose_request_id(request.headers.get(REQUEST_ID_HEADER))

        # Left set after the response: exception handlers read it too
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
