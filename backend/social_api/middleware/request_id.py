"""
Social API: Request ID Middleware
=================================

What:  Tags every request with a short correlation ID.
How:   The middleware takes the client's X-Request-ID (when it is a sane
       token) or mints one, keeps it in a ContextVar and request.state, and
       echoes it back. RequestIDFilter copies the ContextVar onto each log
       record so the formatter can print `%(request_id)s`.
Who:   Installed by create_app(); the filter by setup_logging().
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Client-supplied IDs end up in log lines, so only plain tokens are accepted
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value: Optional[str]) -> str:
    """Return the client's ID when it is a plain token, else a fresh one."""
    if header_value and _VALID_REQUEST_ID.match(header_value):
        return header_value
    return new_request_id()


def current_request_id(request: Optional[Request] = None) -> str:
    """
    ID of the request being served.

    request.state survives after the middleware has unwound (the catch-all
    500 handler runs outside it), the ContextVar covers everything else.
    """
    if request is not None:
        rid = getattr(request.state, "request_id", None)
        if rid:
            return rid
    return request_id_var.get("")


class RequestIDFilter(logging.Filter):
    """Stamps `record.request_id`; `-` outside of a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns the request ID and returns it in the X-Request-ID header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
