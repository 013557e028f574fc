from __future__ import annotations

import logging
import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("tableside.api.access")

HTTP_REQUESTS_TOTAL = Counter(
    "tableside_http_requests_total",
    "HTTP requests by route template and status.",
    ["method", "route", "status_code"],
)
HTTP_REQUEST_SECONDS = Histogram(
    "tableside_http_request_duration_seconds",
    "HTTP request latency by route template.",
    ["method", "route"],
)


def _route_template(request: Request) -> str:
    # /api/tables/1 and /api/tables/7 share the /api/tables/{table_id} series
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _record(request: Request, status_code: int, started: float, failed: bool = False) -> None:
    elapsed = time.perf_counter() - started
    route = _route_template(request)
    HTTP_REQUESTS_TOTAL.labels(request.method, route, str(status_code)).inc()
    HTTP_REQUEST_SECONDS.labels(request.method, route).observe(elapsed)

    fields = {
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "duration_ms": round(elapsed * 1000, 2),
    }
    if failed:
        logger.exception("request_error", extra=fields)
    else:
        logger.info("request_complete", extra=fields)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            _record(request, 500, started, failed=True)
            raise
        _record(request, response.status_code, started)
        return response
