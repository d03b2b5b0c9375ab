"""
Prometheus metrics for the retail admin service.

Tracks HTTP traffic, Functions API outcomes, storage fallbacks and
published order notifications.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

http_requests_total = Counter(
    "retail_admin_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "retail_admin_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

remote_calls_total = Counter(
    "retail_admin_remote_calls_total",
    "Functions API calls by outcome",
    ["kind", "operation", "outcome"],
)

fallback_dispatches_total = Counter(
    "retail_admin_fallback_dispatches_total",
    "Operations served from storage because the Functions API was unreachable",
    ["kind", "operation"],
)

notifications_published_total = Counter(
    "retail_admin_notifications_published_total",
    "Order notifications published to the queue",
    ["event_type"],
)


def track_request_metrics(method: str, endpoint: str, status_code: int, duration: float):
    """Track HTTP request metrics."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)


def track_remote_call(kind: str, operation: str, outcome: str):
    """Track a Functions API call outcome (success, unreachable, error)."""
    remote_calls_total.labels(kind=kind, operation=operation, outcome=outcome).inc()


def track_fallback(kind: str, operation: str):
    """Track a storage fallback dispatch."""
    fallback_dispatches_total.labels(kind=kind, operation=operation).inc()


def track_notification(event_type: str):
    """Track a published order notification."""
    notifications_published_total.labels(event_type=event_type).inc()


async def metrics_endpoint():
    """
    Prometheus metrics endpoint.

    Returns:
        Response with Prometheus metrics in text format
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
