"""Request/response logging middleware with timing and HTTP metrics."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ledgerbank.core.metrics import record_http_request

logger = structlog.get_logger(__name__)


def _route_template(request: Request, path: str) -> str:
    """
    Full route template of the matched endpoint, e.g. /v1/accounts/{account_id}.

    Labelling by template keeps ids out of metric labels. Depending on how
    the router was included, the matched route's path may be relative to
    its parent router; the missing prefix is then taken from the leading
    segments of the request path.
    """
    route = request.scope.get("route")
    template = getattr(route, "path", None)
    if not template:
        return "unmatched"

    segments = path.rstrip("/").split("/")
    depth = len(template.rstrip("/").split("/"))
    if depth >= len(segments):
        return template

    prefix = "/".join(segments[: len(segments) - depth + 1])
    return prefix + template


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion and duration, and records HTTP metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        query = str(request.query_params) if request.query_params else None

        log = logger.bind(method=method, path=path)
        log.info("request_started", query=query)

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.perf_counter() - start_time
            record_http_request(method, _route_template(request, path), 500, duration)
            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2),
            )
            raise

        duration = time.perf_counter() - start_time
        record_http_request(method, _route_template(request, path), response.status_code, duration)
        log.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        return response
