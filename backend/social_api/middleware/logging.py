"""
Social API: Access Log Middleware
=================================

What:  One access-log line per request: method, path, the handler that
       served it, the target post id, status and duration.
Who:   Applied to every request except /health.

Log level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Only the `id` parameter is logged. Post content travels in the query
string and stays out of the log.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("social_api.access")

SKIP_PATHS = frozenset({"/health"})


def handler_name(request: Request) -> str:
    """Name of the endpoint the router matched, `-` for unknown paths."""
    route = request.scope.get("route")
    return getattr(route, "name", None) or "-"


def status_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access line after the response has been produced."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        post_id: Optional[str] = request.query_params.get("id")
        status = response.status_code
        logger.log(
            status_level(status),
            "%s %s -> %s(id=%s) %d %.1fms",
            request.method,
            request.url.path,
            handler_name(request),
            post_id if post_id is not None else "-",
            status,
            duration_ms,
            extra={
                "handler": handler_name(request),
                "post_id": post_id,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
