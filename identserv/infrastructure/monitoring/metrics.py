"""Prometheus metrics for the ident listener.

Operational metrics only: answered queries by outcome, how many owners hold
the listener open, whether it is open, and failed binds. Identities and
ports are never used as labels.
"""

import os
import threading

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)

# Content type for Prometheus metrics endpoint
METRICS_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

# Thread lock for singleton initialization
_collector_lock = threading.Lock()


class IdentMetricsCollector:
    """Collects and manages ident listener Prometheus metrics.

    Attributes:
        ident_queries_total: Counter of answered queries.
        ident_registered_owners: Gauge of owners holding the listener open.
        ident_listener_active: Gauge, 1 while the listener is open.
        ident_listener_bind_failures_total: Counter of failed binds.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics collector.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get("SERVICE_NAME", "identserv")

        self.ident_queries_total = Counter(
            name="ident_queries_total",
            documentation="Total ident queries answered",
            labelnames=["service", "environment", "reply_type", "error"],
            registry=self._registry,
        )

        self.ident_registered_owners = Gauge(
            name="ident_registered_owners",
            documentation="Owners currently awaiting an ident probe",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

        self.ident_listener_active = Gauge(
            name="ident_listener_active",
            documentation="1 while the ident listener is open",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

        self.ident_listener_bind_failures_total = Counter(
            name="ident_listener_bind_failures_total",
            documentation="Total failed attempts to open the ident listener",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

    def record_query(self, reply_type: str, error: str = "") -> None:
        """Record one answered query.

        Args:
            reply_type: USERID or ERROR.
            error: Error token for ERROR replies, empty otherwise.
        """
        self.ident_queries_total.labels(
            service=self._service_name,
            environment=self._environment,
            reply_type=reply_type,
            error=error,
        ).inc()

    def set_registered_owners(self, count: int) -> None:
        self.ident_registered_owners.labels(
            service=self._service_name, environment=self._environment
        ).set(count)

    def set_listener_active(self, active: bool) -> None:
        self.ident_listener_active.labels(
            service=self._service_name, environment=self._environment
        ).set(1 if active else 0)

    def record_bind_failure(self) -> None:
        self.ident_listener_bind_failures_total.labels(
            service=self._service_name, environment=self._environment
        ).inc()

    def get_registry(self) -> CollectorRegistry:
        """Get the collector registry."""
        return self._registry


# Singleton instance
_metrics_collector: IdentMetricsCollector | None = None


def get_metrics_collector() -> IdentMetricsCollector:
    """Get the singleton IdentMetricsCollector instance (thread-safe).

    Uses double-checked locking pattern for thread-safe lazy initialization.
    """
    global _metrics_collector
    if _metrics_collector is None:
        with _collector_lock:
            if _metrics_collector is None:
                _metrics_collector = IdentMetricsCollector()
    return _metrics_collector


def generate_metrics() -> bytes:
    """Generate Prometheus metrics in exposition format."""
    return generate_latest(get_metrics_collector().get_registry())


def reset_metrics_collector() -> None:
    """Reset the singleton collector (for testing only)."""
    global _metrics_collector
    with _collector_lock:
        _metrics_collector = None
