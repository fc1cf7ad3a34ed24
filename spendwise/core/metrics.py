"""Prometheus metrics for the application."""

import time

from prometheus_client import Counter, Histogram, Info, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# --- Metrics ---

APP_INFO = Info("app", "SpendWise application info")
APP_INFO.info({"version": "1.0.0", "name": "spendwise"})

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30],
)

AI_CALLS = Counter(
    "ai_gateway_calls_total",
    "AI gateway attempt sequences by provider and final outcome",
    ["provider", "outcome"],
)

AI_CALL_DURATION = Histogram(
    "ai_gateway_call_duration_seconds",
    "Wall time of a full AI gateway attempt sequence",
    ["provider"],
    buckets=[0.25, 0.5, 1, 2.5, 5, 10, 15, 30, 60],
)

AI_THROTTLE_REJECTIONS = Counter(
    "ai_gateway_throttle_rejections_total",
    "AI gateway calls rejected by the single-flight gate",
)


# --- Middleware ---

# Collapse the currency segment to keep label cardinality bounded
_PATH_PREFIXES = ("/api/v1/exchange/rates/",)


def _normalize_path(path: str) -> str:
    """Replace the trailing path parameter with {base}."""
    for prefix in _PATH_PREFIXES:
        if path.startswith(prefix) and len(path) > len(prefix):
            return f"{prefix}{{base}}"
    return path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Collect HTTP request metrics for Prometheus."""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        path = _normalize_path(request.url.path)

        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        REQUEST_COUNT.labels(method=method, path=path, status=response.status_code).inc()
        REQUEST_DURATION.labels(method=method, path=path).observe(duration)

        return response


def metrics_response() -> Response:
    """Generate Prometheus /metrics response."""
    return Response(
        content=generate_latest(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
