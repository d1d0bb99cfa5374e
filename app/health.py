"""
Health check endpoints for liveness and readiness probes.
"""
from datetime import datetime, timezone
from typing import Dict, Any
import psutil
from .config import get_settings
from .logging import get_logger
from .services.event_store import EventStore

logger = get_logger()


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


class HealthChecker:
    """
    Health checker for the event store service.

    Provides:
    - Liveness checks (is the service running?)
    - Readiness checks (can the service handle traffic?)
    """

    def __init__(self, service_name: str = "eventstore", version: str = "0.1.0"):
        self.service_name = service_name
        self.version = version
        self.settings = get_settings()

    def liveness(self) -> Dict[str, Any]:
        """
        Liveness check - basic health check.

        Returns:
            dict: Health status with service info and timestamp
        """
        return {
            "status": "ok",
            "service": self.service_name,
            "version": self.version,
            "timestamp": _utc_timestamp(),
        }

    async def readiness(self, store: EventStore) -> Dict[str, Any]:
        """
        Readiness check - comprehensive health check.

        Checks:
        - Event store backend reachability
        - Disk space availability
        - Memory availability

        Args:
            store: The event store whose backend is probed

        Returns:
            dict: Readiness status with detailed check results
        """
        checks = {
            "store": self._check_store(store),
            "disk_space": self._check_disk_space(),
            "memory": self._check_memory(),
        }
        overall_status = "ready"
        if any(check["status"] == "error" for check in checks.values()):
            overall_status = "not_ready"

        return {
            "status": overall_status,
            "service": self.service_name,
            "version": self.version,
            "timestamp": _utc_timestamp(),
            "checks": checks,
        }

    def _check_store(self, store: EventStore) -> Dict[str, Any]:
        """
        Check the event store backend.

        Returns:
            dict: Store health check result
        """
        healthy = store.health_check()
        return {
            "status": "ok" if healthy else "error",
            "adapter": self.settings.STORE_ADAPTER,
        }

    def _check_disk_space(self, threshold_gb: float = 1.0) -> Dict[str, Any]:
        """Free space on the root filesystem; error below threshold_gb, warning below twice that."""
        try:
            disk = psutil.disk_usage("/")
        except OSError as e:
            logger.warning("disk_health_check_failed", error=str(e))
            return {"status": "error", "error": str(e)}

        gib = 1024**3
        return {
            "status": _grade(disk.free / gib, threshold_gb),
            "available_gb": round(disk.free / gib, 2),
            "total_gb": round(disk.total / gib, 2),
            "used_percent": disk.percent,
        }

    def _check_memory(self, threshold_mb: float = 50.0) -> Dict[str, Any]:
        """Available system memory, graded like disk space."""
        try:
            memory = psutil.virtual_memory()
        except OSError as e:
            logger.warning("memory_health_check_failed", error=str(e))
            return {"status": "error", "error": str(e)}

        mib = 1024**2
        return {
            "status": _grade(memory.available / mib, threshold_mb),
            "available_mb": round(memory.available / mib, 2),
            "total_mb": round(memory.total / mib, 2),
            "used_percent": memory.percent,
        }


def _grade(available: float, threshold: float) -> str:
    if available < threshold:
        return "error"
    if available < threshold * 2:
        return "warning"
    return "ok"
