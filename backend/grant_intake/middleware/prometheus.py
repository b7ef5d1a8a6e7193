"""Prometheus Middleware.

Captures HTTP metrics for every request except the scrape endpoint itself.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..core.constants import HttpStatusCodes, Metrics
from ..core.metrics import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)
from ..utils import normalize_path


def endpoint_label(request: Request) -> str:
    """Label for a request: the matched route template, else a normalized path.

    Routes are only resolved after the middleware runs, so the template is
    read once the response is back.
    """
    route = request.scope.get("route")
    route_path = getattr(route, "path", None)
    if route_path:
        return route_path
    return normalize_path(request.url.path)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Track request totals, durations and in-flight requests."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path == Metrics.ENDPOINT_PATH:
            return await call_next(request)

        method = request.method
        in_progress_label = normalize_path(path)
        http_requests_in_progress.labels(method=method, endpoint=in_progress_label).inc()

        start_time = time.time()
        status_code = HttpStatusCodes.INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration = time.time() - start_time
            endpoint = endpoint_label(request)

            http_requests_total.labels(
                method=method,
                endpoint=endpoint,
                status_code=status_code
            ).inc()
            http_request_duration_seconds.labels(
                method=method,
                endpoint=endpoint
            ).observe(duration)
            http_requests_in_progress.labels(method=method, endpoint=in_progress_label).dec()
