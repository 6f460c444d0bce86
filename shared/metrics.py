"""
Shared metrics for outbound vendor API calls.
"""

import threading
from typing import Dict, Any, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, REGISTRY


class MetricsCollector:
    """Request counters and latency histograms keyed by operation and status."""

    def __init__(self, registry: Optional[CollectorRegistry] = REGISTRY):
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        self._metrics["api_requests_total"] = Counter(
            "api_requests_total",
            "Total vendor API requests",
            ["method", "operation", "status_code"],
            registry=self.registry
        )

        self._metrics["api_request_duration_seconds"] = Histogram(
            "api_request_duration_seconds",
            "Vendor API request duration in seconds",
            ["method", "operation"],
            registry=self.registry
        )

        self._metrics["api_transport_errors_total"] = Counter(
            "api_transport_errors_total",
            "Vendor API requests that failed before a response arrived",
            ["method", "operation"],
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_request(self, method: str, operation: str, status_code: int, duration: float):
        """Record one completed exchange."""
        self._metrics["api_requests_total"].labels(
            method=method,
            operation=operation,
            status_code=str(status_code)
        ).inc()

        self._metrics["api_request_duration_seconds"].labels(
            method=method,
            operation=operation
        ).observe(duration)

    def record_transport_error(self, method: str, operation: str):
        """Record an exchange that never produced a response."""
        self._metrics["api_transport_errors_total"].labels(
            method=method,
            operation=operation
        ).inc()


_collector: Optional[MetricsCollector] = None
_collector_lock = threading.Lock()


def get_metrics_collector() -> MetricsCollector:
    """Process-wide collector registered on the default Prometheus registry."""
    global _collector
    with _collector_lock:
        if _collector is None:
            _collector = MetricsCollector()
        return _collector
