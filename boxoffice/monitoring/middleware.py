"""HTTP request metrics for the FastAPI app.

Requests are labelled by route template rather than raw URL, so path
parameters and unknown URLs do not create new series. ``/metrics`` itself
is exposed through ``mount_metrics`` and is not recorded.
"""

import time

from fastapi import FastAPI
from prometheus_client import Counter, Histogram, make_asgi_app
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

METRICS_PATH = "/metrics"
UNMATCHED_ROUTE = "unmatched"

HTTP_REQUESTS_TOTAL = Counter(
    "boxoffice_http_requests_total",
    "HTTP requests by method, route template and status",
    ["method", "path", "status"],
)

HTTP_REQUEST_DURATION = Histogram(
    "boxoffice_http_request_duration_seconds",
    "HTTP request latency by method and route template",
    ["method", "path"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0],
)


def route_template(request: Request) -> str:
    """Path template of the matched route, e.g. ``/api/movies/box-office``.

    Only set once routing has run; requests that matched nothing
    share the ``unmatched`` label.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Counts requests and observes latency per route template.

    A request whose handler raises is recorded as status 500 before the
    error propagates to the server error handler.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path.startswith(METRICS_PATH):
            return await call_next(request)

        status = "500"
        start = time.perf_counter()
        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        finally:
            template = route_template(request)
            HTTP_REQUESTS_TOTAL.labels(method=request.method, path=template, status=status).inc()
            HTTP_REQUEST_DURATION.labels(method=request.method, path=template).observe(
                time.perf_counter() - start
            )


def mount_metrics(app: FastAPI) -> None:
    """Expose the Prometheus registry at ``/metrics``."""
    app.mount(METRICS_PATH, make_asgi_app())
