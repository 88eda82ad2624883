"""Prometheus counters for cache activity."""

from prometheus_client import Counter

from kv_cache.config import settings

CACHE_REQUESTS = Counter(
    'kv_cache_requests_total',
    'Cache operations by outcome',
    ['operation', 'result']
)
CACHE_EVICTIONS = Counter('kv_cache_evictions_total', 'Keys evicted under capacity pressure', ['policy'])
CACHE_EXPIRATIONS = Counter('kv_cache_expirations_total', 'Expired keys purged from the cache')


def record_request(operation: str, result: str) -> None:
    if settings.enable_metrics:
        CACHE_REQUESTS.labels(operation=operation, result=result).inc()


def record_eviction(policy: str) -> None:
    if settings.enable_metrics:
        CACHE_EVICTIONS.labels(policy=policy).inc()


def record_expirations(count: int) -> None:
    if settings.enable_metrics and count:
        CACHE_EXPIRATIONS.inc(count)
