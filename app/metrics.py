"""
Prometheus metrics for the event store service.
"""
from prometheus_client import Counter, Histogram, Gauge, Info, CollectorRegistry
import psutil
import os


class Metrics:
    """
    Centralized metrics for the event store service.
    """

    def __init__(self, service_name: str = "eventstore", version: str = "0.1.0", registry=None):
        self.service_name = service_name
        self.version = version
        self.registry = registry or CollectorRegistry()

        # HTTP Metrics
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["service", "method", "path", "status"],
            registry=self.registry,
        )

        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["service", "method", "path"],
            registry=self.registry,
        )

        self.http_requests_active = Gauge(
            "http_requests_active",
            "Number of active HTTP requests",
            ["service"],
            registry=self.registry,
        )
        self.http_requests_active.labels(service=service_name).set(0)

        # Application Info
        self.app_info = Info(
            "app",
            "Application information",
            registry=self.registry,
        )
        self.app_info.info({"service": service_name, "version": version})

        self.app_up = Gauge(
            "app_up",
            "Application up status (1=up, 0=down)",
            ["service", "version"],
            registry=self.registry,
        )
        self.app_up.labels(service=service_name, version=version).set(1)

        # Business Metrics - event store specific
        self.operations_total = Counter(
            "eventstore_operations_total",
            "Event store operations by outcome",
            ["operation", "outcome"],
            registry=self.registry,
        )

        self.stored_events = Gauge(
            "eventstore_events",
            "Number of events currently stored",
            registry=self.registry,
        )

        # Process metrics, refreshed by update_system_metrics()
        self.process_cpu_seconds = Counter(
            "process_cpu_seconds_total",
            "Total CPU time consumed by process",
            ["service"],
            registry=self.registry,
        )
        self.process_memory_bytes = Gauge(
            "process_resident_memory_bytes",
            "Resident memory size in bytes",
            ["service"],
            registry=self.registry,
        )
        self.process_open_fds = Gauge(
            "process_open_fds",
            "Number of open file descriptors",
            ["service"],
            registry=self.registry,
        )
        self._process = psutil.Process(os.getpid())
        self._cpu_seen = 0.0
        self.update_system_metrics()

    def update_system_metrics(self):
        """Refresh process CPU, RSS and fd metrics from psutil."""
        service = self.service_name
        try:
            with self._process.oneshot():
                cpu = self._process.cpu_times()
                rss = self._process.memory_info().rss
                # num_fds() only exists on POSIX
                fds = self._process.num_fds() if hasattr(self._process, "num_fds") else None
        except psutil.Error:
            return

        cpu_total = cpu.user + cpu.system
        # Counters only go up: add what was consumed since the last refresh
        if cpu_total > self._cpu_seen:
            self.process_cpu_seconds.labels(service=service).inc(cpu_total - self._cpu_seen)
            self._cpu_seen = cpu_total
        self.process_memory_bytes.labels(service=service).set(rss)
        if fds is not None:
            self.process_open_fds.labels(service=service).set(fds)

    def record_operation(self, operation: str, outcome: str):
        """Count one event store call."""
        self.operations_total.labels(operation=operation, outcome=outcome).inc()

    def set_stored_events(self, count: int):
        """Set the number of stored events."""
        self.stored_events.set(count)
