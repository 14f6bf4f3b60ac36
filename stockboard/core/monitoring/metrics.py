"""Prometheus metrics helpers for stockboard."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

_ALLOWED_UPLOAD_STATUSES = {"applied", "rejected", "not_applied", "busy", "failed"}


class MetricsCollector:
    """Collects upload and fetch metrics on a private registry."""

    def __init__(self, *, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.uploads_total = Counter(
            "stockboard_uploads_total",
            "Dataset upload outcomes grouped by dataset kind and status.",
            ("kind", "status"),
            registry=self.registry,
        )
        self.fetch_requests_total = Counter(
            "stockboard_fetch_requests_total",
            "Total count of default dataset fetches.",
            ("source",),
            registry=self.registry,
        )
        self.fetch_failures_total = Counter(
            "stockboard_fetch_failures_total",
            "Total count of failed default dataset fetches.",
            ("source",),
            registry=self.registry,
        )
        self.fetch_latency_seconds = Histogram(
            "stockboard_fetch_latency_seconds",
            "Latency distribution for default dataset fetches.",
            buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, float("inf")),
            registry=self.registry,
        )

    def record_upload(self, kind: str, status: str) -> None:
        label = status if status in _ALLOWED_UPLOAD_STATUSES else "__other__"
        self.uploads_total.labels(kind=kind, status=label).inc()

    def observe_fetch(self, source: str, latency_seconds: float, *, success: bool = True) -> None:
        """Record one fetch attempt against ``source``."""

        self.fetch_latency_seconds.observe(latency_seconds)
        self.fetch_requests_total.labels(source=source).inc()
        if not success:
            self.fetch_failures_total.labels(source=source).inc()

    def render(self) -> bytes:
        """Render metrics in Prometheus exposition format."""

        return generate_latest(self.registry)


_DEFAULT_COLLECTOR: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Return the global metrics collector instance."""

    global _DEFAULT_COLLECTOR
    if _DEFAULT_COLLECTOR is None:
        _DEFAULT_COLLECTOR = MetricsCollector()
    return _DEFAULT_COLLECTOR


def configure_metrics_collector(collector: MetricsCollector | None) -> None:
    """Override the global metrics collector for application wiring or tests."""

    global _DEFAULT_COLLECTOR
    _DEFAULT_COLLECTOR = collector
