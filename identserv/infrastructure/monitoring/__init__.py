"""Infrastructure monitoring components.

Prometheus metrics collection for the ident listener.
"""

from identserv.infrastructure.monitoring.metrics import (
    METRICS_CONTENT_TYPE,
    IdentMetricsCollector,
    generate_metrics,
    get_metrics_collector,
    reset_metrics_collector,
)

__all__ = [
    "METRICS_CONTENT_TYPE",
    "IdentMetricsCollector",
    "generate_metrics",
    "get_metrics_collector",
    "reset_metrics_collector",
]
