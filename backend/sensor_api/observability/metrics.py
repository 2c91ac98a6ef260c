from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable

from fastapi import Request, Response
from prometheus_client import Counter, Histogram, start_http_server
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

UNMATCHED_PATH = "<unmatched>"

REQUEST_COUNTER = Counter(
    "sensor_api_http_requests_total",
    "Total HTTP requests handled by the API",
    ["method", "path", "status_code"],
)

REQUEST_LATENCY = Histogram(
    "sensor_api_http_request_latency_seconds",
    "Latency of HTTP requests in seconds",
    ["method", "path"],
)


def _route_path(request: Request) -> str:
    # Label by route template; arbitrary 404 paths would blow up cardinality.
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_PATH)


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Middleware that tracks basic HTTP metrics.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        latency = time.perf_counter() - start

        path = _route_path(request)

        REQUEST_COUNTER.labels(
            method=request.method,
            path=path,
            status_code=response.status_code,
        ).inc()

        REQUEST_LATENCY.labels(
            method=request.method,
            path=path,
        ).observe(latency)

        return response


def start_metrics_server(port: int, host: str = "0.0.0.0") -> None:
    """
    Expose Prometheus metrics on a dedicated listener.

    Kept off the API router so /health stays the only API route.
    """
    start_http_server(port, addr=host)
    logger.info("Metrics exporter listening on :%s", port)
