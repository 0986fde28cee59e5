import logging
from prometheus_client import Counter, Histogram, Info, generate_latest
from prometheus_client.core import CollectorRegistry

logger = logging.getLogger(__name__)

# Prometheus Registry
REGISTRY = CollectorRegistry()

# Service Metrics
service_calls_total = Counter(
    'fleetflow_service_calls_total',
    'Total service method calls',
    ['status', 'service', 'method'],
    registry=REGISTRY
)

service_duration_seconds = Histogram(
    'fleetflow_service_duration_seconds',
    'Service method duration in seconds',
    ['service', 'method'],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
    registry=REGISTRY
)

# Business Metrics
trip_status_transitions_total = Counter(
    'fleetflow_trip_status_transitions_total',
    'Trip status changes applied, by target status',
    ['status'],
    registry=REGISTRY
)

maintenance_events_total = Counter(
    'fleetflow_maintenance_events_total',
    'Maintenance logs opened and completed',
    ['event'],
    registry=REGISTRY
)

system_info = Info(
    'fleetflow_info',
    'System information',
    registry=REGISTRY
)


class PrometheusMetricsCollector:
    """Thin facade over the module-level Prometheus instruments"""

    def __init__(self):
        system_info.info({
            'version': '1.0.0',
            'service': 'fleetflow'
        })

    def record_service_call(
        self,
        service_name: str,
        method_name: str,
        duration_seconds: float,
        success: bool,
    ):
        status = 'success' if success else 'error'

        service_calls_total.labels(
            status=status,
            service=service_name,
            method=method_name
        ).inc()

        service_duration_seconds.labels(
            service=service_name,
            method=method_name
        ).observe(duration_seconds)

    def record_trip_transition(self, status: str):
        trip_status_transitions_total.labels(status=status).inc()

    def record_maintenance_event(self, event: str):
        maintenance_events_total.labels(event=event).inc()

    def get_prometheus_metrics(self) -> bytes:
        """Get Prometheus metrics in text format"""
        return generate_latest(REGISTRY)


# Global instance
prometheus_collector = PrometheusMetricsCollector()
