"""
Tests for health check endpoints.
"""
from unittest.mock import MagicMock
from fastapi.testclient import TestClient
from app.main import app
from app.services.event_store import EventStore, get_event_store

client = TestClient(app)


def test_health_liveness():
    """Test liveness health check."""
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["service"] == "eventstore"
    assert data["version"] == "0.1.0"
    assert "timestamp" in data


def test_health_readiness():
    """Test readiness health check."""
    r = client.get("/health/ready")
    # Should be 200 (ready) or 503 (not ready)
    assert r.status_code in [200, 503]
    data = r.json()
    assert data["service"] == "eventstore"
    assert "timestamp" in data
    assert data["checks"]["store"]["status"] == "ok"
    assert "status" in data


def test_health_readiness_store_down():
    """An unreachable store backend makes the service not ready."""
    adapter = MagicMock()
    adapter.health_check.return_value = False
    app.dependency_overrides[get_event_store] = lambda: EventStore(adapter=adapter)
    try:
        r = client.get("/health/ready")
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 503
    assert r.json()["status"] == "not_ready"
    assert r.json()["checks"]["store"]["status"] == "error"


def test_metrics_endpoint():
    """Test Prometheus metrics endpoint."""
    client.get("/v1/events")
    r = client.get("/metrics/")
    assert r.status_code == 200
    content = r.text
    assert "http_requests_total" in content
    assert "http_request_duration_seconds" in content
    assert "app_up" in content
    assert "eventstore_operations_total" in content


def test_correlation_id_in_response():
    """Test that correlation ID is added to response headers."""
    r = client.get("/health")
    assert "x-correlation-id" in r.headers


def test_correlation_id_propagation():
    """Test that provided correlation ID is propagated."""
    correlation_id = "test-correlation-id-123"
    r = client.get("/health", headers={"x-correlation-id": correlation_id})
    assert r.headers["x-correlation-id"] == correlation_id


def test_disk_and_memory_grading():
    """Below the threshold is an error, below twice the threshold a warning."""
    from collections import namedtuple
    from unittest.mock import patch
    from app.health import HealthChecker

    Disk = namedtuple("Disk", "free total percent")
    Memory = namedtuple("Memory", "available total percent")
    gib, mib = 1024**3, 1024**2
    checker = HealthChecker()

    with patch("app.health.psutil.disk_usage", return_value=Disk(int(1.5 * gib), 10 * gib, 85.0)):
        assert checker._check_disk_space()["status"] == "warning"
    with patch("app.health.psutil.disk_usage", return_value=Disk(gib // 2, 10 * gib, 95.0)):
        assert checker._check_disk_space()["status"] == "error"
    with patch("app.health.psutil.virtual_memory", return_value=Memory(500 * mib, 1000 * mib, 50.0)):
        memory = checker._check_memory()
    assert memory["status"] == "ok"
    assert memory["available_mb"] == 500.0
    with patch("app.health.psutil.disk_usage", side_effect=OSError("no such device")):
        assert checker._check_disk_space()["status"] == "error"
