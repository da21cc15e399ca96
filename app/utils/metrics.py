"""
Prometheus-based metrics for production monitoring.
Provides /metrics endpoint for scraping.
"""
from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import APIRouter, Response


# Counters
payment_orders_created_total = Counter(
    "payment_orders_created_total",
    "Total number of provider orders created",
)

payment_verifications_total = Counter(
    "payment_verifications_total",
    "Payment verification outcomes",
    ["result"],  # granted, invalid_signature, unknown_order, user_not_found
)

purchase_grants_total = Counter(
    "purchase_grants_total",
    "Total purchase records written",
)

content_access_total = Counter(
    "content_access_total",
    "Protected content access decisions",
    ["decision"],  # allowed, forbidden, not_found
)

provider_requests_total = Counter(
    "provider_requests_total",
    "Total payment provider API requests",
    ["method", "status"],
)

circuit_breaker_state = Gauge(
    "circuit_breaker_state",
    "Circuit breaker state (0=closed, 1=open)",
    ["name"],
)

# Histograms
provider_request_duration_seconds = Histogram(
    "provider_request_duration_seconds",
    "Payment provider API request duration",
    ["method"],
    buckets=[0.1, 0.5, 1, 2, 5, 10],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration",
    ["method", "status_code"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1, 2, 5],
)


# Metrics endpoint router
router = APIRouter()


@router.get("/metrics")
def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint for scraping."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
