from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

# Dedicated registry so applications can mount it next to their own
registry = CollectorRegistry()

cache_hits = Counter("cacheman_hits_total", "Reads served from a backend", ["cache"], registry=registry)
cache_misses = Counter("cacheman_misses_total", "Reads with no fresh backend value", ["cache"], registry=registry)
inflight_joins = Counter("cacheman_inflight_joins_total", "Misses that joined a running fetch", ["cache"], registry=registry)
upstream_calls = Counter("cacheman_upstream_calls_total", "Upstream invocations", ["cache"], registry=registry)
upstream_failures = Counter("cacheman_upstream_failures_total", "Upstream invocations that raised", ["cache"], registry=registry)
backend_errors = Counter("cacheman_backend_errors_total", "Backend writes or resets that raised", ["cache"], registry=registry)
cache_clears = Counter("cacheman_clears_total", "Explicit clear() calls", ["cache"], registry=registry)
fetch_duration_seconds = Histogram(
    "cacheman_fetch_duration_seconds",
    "Upstream fetch latency seconds",
    ["cache"],
    buckets=(0.005, 0.01, 0.05, 0.1, 0.5, 1, 5, 30),
    registry=registry,
)


def export_metrics() -> bytes:
    """Return the latest metrics payload (Prometheus text format)."""
    return generate_latest(registry)
