"""Unit tests for metrics and health endpoints."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from bulkscan_orchestrator.config import Settings, get_settings
from bulkscan_orchestrator.main import app
from bulkscan_orchestrator.observability.health import ComponentHealth, HealthStatus, get_overall_health


@pytest.fixture
def client():
    return TestClient(app)


class TestMetricsEndpoint:
    """Test GET /metrics."""

    def test_exposes_orchestrator_metrics(self, client):
        """Test Prometheus exposition includes orchestrator counters."""
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "bulkscan_envelopes_processed_total" in response.text
        assert "bulkscan_callback_results_total" in response.text


class TestHealthEndpoint:
    """Test GET /health."""

    def test_healthy(self, client):
        """Test 200 when the broker answers."""
        with patch(
            "bulkscan_orchestrator.observability.router.check_redis_health",
            return_value=ComponentHealth(status=HealthStatus.HEALTHY, message="Redis connection OK", latency_ms=1.0),
        ):
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["components"]["broker"]["message"] == "Redis connection OK"

    def test_unhealthy(self, client):
        """Test 503 when the broker is unreachable."""
        with patch(
            "bulkscan_orchestrator.observability.router.check_redis_health",
            return_value=ComponentHealth(status=HealthStatus.UNHEALTHY, message="Redis error: refused"),
        ):
            response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_pings_queue_broker(self, client):
        """Test the configured queue broker is the one checked."""
        app.dependency_overrides[get_settings] = lambda: Settings(
            _env_file=None, CELERY_BROKER_URL="redis://broker:6379/1"
        )
        try:
            with patch(
                "bulkscan_orchestrator.observability.router.check_redis_health",
                return_value=ComponentHealth(status=HealthStatus.HEALTHY),
            ) as check:
                client.get("/health")
        finally:
            app.dependency_overrides.clear()

        check.assert_called_once_with("redis://broker:6379/1")


class TestOverallHealth:
    """Test aggregation of component health."""

    def test_degraded(self):
        """Test degraded component without failures."""
        components = {
            "broker": ComponentHealth(status=HealthStatus.HEALTHY),
            "other": ComponentHealth(status=HealthStatus.DEGRADED),
        }

        assert get_overall_health(components) == HealthStatus.DEGRADED
