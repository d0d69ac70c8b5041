"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry, generate_latest

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

quote_computations = Counter(
    'quote_computations_total',
    'Total quote computations',
    ['service'],
    registry=registry
)

cache_hits = Counter(
    'cache_hits_total',
    'Total cache hits',
    ['cache_key'],
    registry=registry
)

cache_misses = Counter(
    'cache_misses_total',
    'Total cache misses',
    ['cache_key'],
    registry=registry
)

config_fetches = Counter(
    'config_fetches_total',
    'Pricing configuration fetch attempts',
    ['service', 'outcome'],
    registry=registry
)

config_fetch_duration = Histogram(
    'config_fetch_duration_seconds',
    'Pricing configuration fetch duration in seconds',
    ['service'],
    registry=registry
)

override_invalidations = Counter(
    'override_invalidations_total',
    'Times standing overrides were cleared by a base input change',
    ['service'],
    registry=registry
)

webhook_deliveries = Counter(
    'webhook_deliveries_total',
    'Total webhook delivery attempts',
    ['status', 'retry_count'],
    registry=registry
)

webhook_duration = Histogram(
    'webhook_delivery_duration_seconds',
    'Webhook delivery duration in seconds',
    ['status'],
    registry=registry
)

active_sessions = Gauge(
    'active_quote_sessions',
    'Number of open quote sessions',
    registry=registry
)

redis_connected = Gauge(
    'redis_connected',
    'Redis connection status (1=connected, 0=disconnected)',
    registry=registry
)


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    return generate_latest(registry).decode('utf-8')
