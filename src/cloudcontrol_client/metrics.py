"""Prometheus instrumentation for CloudControl API requests.

Metrics are registered on a private registry rather than the global
``REGISTRY`` so that several clients (or tests) can coexist. Expose them by
registering the registry with your own exporter, or via ``generate_latest``.
"""

import prometheus_client
from prometheus_client.core import CollectorRegistry

METRIC_PREFIX = "cloudcontrol_client"


class ClientMetrics:
    """Request counters and latency histograms for a CloudControl client."""

    def __init__(self, registry: CollectorRegistry | None = None):
        """Initialize the metrics.

        Args:
            registry: Registry to register metrics on. A new private
                registry is created if omitted.
        """
        self.registry = registry or CollectorRegistry()

        self._requests = prometheus_client.Counter(
            f"{METRIC_PREFIX}_requests",
            "CloudControl API requests by operation and HTTP status "
            "('error' for transport failures)",
            labelnames=["operation", "status"],
            registry=self.registry,
        )
        self._duration = prometheus_client.Histogram(
            f"{METRIC_PREFIX}_request_duration_seconds",
            "CloudControl API request duration in seconds",
            labelnames=["operation"],
            registry=self.registry,
        )

    def observe(self, operation: str, status: int | str, duration: float) -> None:
        """Record one completed (or failed) API round trip."""
        self._requests.labels(operation=operation, status=str(status)).inc()
        self._duration.labels(operation=operation).observe(duration)

    def generate_latest(self) -> bytes:
        """Render the metrics in Prometheus exposition format."""
        return prometheus_client.generate_latest(self.registry)
