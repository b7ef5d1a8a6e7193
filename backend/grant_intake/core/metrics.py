"""Prometheus Metrics.

This module defines and exports Prometheus metrics for monitoring the application.
Metrics include counters, gauges and histograms for tracking:
- API requests and responses
- Application submissions
- Database connectivity and queries
- Outbound notifications
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)

# ========================================
# Application Metrics
# ========================================

applications_submitted_total = Counter(
    'applications_submitted_total',
    'Total number of grant applications persisted'
)

application_submission_failures_total = Counter(
    'application_submission_failures_total',
    'Total number of grant application submissions that failed before persistence',
    ['reason']
)

# ========================================
# API Metrics
# ========================================

http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
)

http_requests_in_progress = Gauge(
    'http_requests_in_progress',
    'Number of HTTP requests currently being processed',
    ['method', 'endpoint']
)

# ========================================
# Database Metrics
# ========================================

db_connection_status = Gauge(
    'db_connection_status',
    'Database connection status (1 = ready, 0 = not ready)'
)

db_queries_total = Counter(
    'db_queries_total',
    'Total number of database queries',
    ['operation', 'status']
)

db_query_duration_seconds = Histogram(
    'db_query_duration_seconds',
    'Database query duration in seconds',
    ['operation'],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0)
)

# ========================================
# Notification Metrics
# ========================================

notifications_total = Counter(
    'notifications_total',
    'Total outbound notifications by outcome',
    ['outcome']
)

notification_duration_seconds = Histogram(
    'notification_duration_seconds',
    'Outbound notification call duration in seconds',
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
)

# ========================================
# Application Info
# ========================================

app_info = Info(
    'grant_intake_app',
    'Grant intake application information'
)


def set_app_info(version: str, environment: str):
    """Set application information.

    Args:
        version: Application version
        environment: Environment (development, staging, production)
    """
    app_info.info({
        'version': version,
        'environment': environment
    })


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest()


def get_content_type() -> str:
    """Get Prometheus content type."""
    return CONTENT_TYPE_LATEST
