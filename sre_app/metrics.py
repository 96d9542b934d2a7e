"""Request metrics: Prometheus counter and histogram, keyed by route."""

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest

# Seconds; matches the Prometheus client default buckets
DURATION_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0)


class MetricsRecorder:
    """Process-lifetime aggregates shared by every handler.

    Each recorder owns its registry, so several apps (or tests) can run in one
    process without colliding on metric names. prometheus_client locks every
    increment and observation, which makes ``record`` safe from worker threads.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()
        self.requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["path", "status"],
            registry=self.registry,
        )
        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "Duration of HTTP requests in seconds",
            ["path"],
            buckets=DURATION_BUCKETS,
            registry=self.registry,
        )

    def record(self, route: str, status: int, duration_s: float) -> None:
        self.requests_total.labels(route, str(status)).inc()
        self.request_duration.labels(route).observe(duration_s)

    def exposition(self) -> bytes:
        """Render all series in the Prometheus text format."""
        return generate_latest(self.registry)
