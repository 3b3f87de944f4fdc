"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at the /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Registration lifecycle metrics
registration_attempts = Counter(
    'registration_attempts_total',
    'Event registration attempts',
    ['result']  # created, duplicate
)

registration_transitions = Counter(
    'registration_transitions_total',
    'Registration status transitions performed by organizers',
    ['to_status']  # approved, rejected, checked_in
)

# Notification side-effect metrics
notification_writes = Counter(
    'notification_writes_total',
    'Best-effort notification writes',
    ['type', 'result']  # result: created, failed
)

# Networking metrics
connection_actions = Counter(
    'connection_actions_total',
    'Connection workflow actions',
    ['action', 'result']  # action: request/accept/reject, result: ok/conflict
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set/invalidate, hit/miss/error
)

request_latency = Histogram(
    'http_request_latency_seconds',
    'HTTP request latency',
    ['method'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_registration_attempt(result: str):
    """Record a registration attempt. Result: created, duplicate"""
    registration_attempts.labels(result=result).inc()


def record_registration_transition(to_status: str):
    registration_transitions.labels(to_status=to_status).inc()


def record_notification(notification_type: str, created: bool):
    """Record the outcome of a best-effort notification write."""
    result = "created" if created else "failed"
    notification_writes.labels(type=notification_type, result=result).inc()


def record_connection_action(action: str, result: str):
    connection_actions.labels(action=action, result=result).inc()


def record_cache_operation(operation: str, result: str):
    """Record cache operation. Result: hit, miss, ok, error"""
    cache_operations.labels(operation=operation, result=result).inc()
