"""
Tests for Health Endpoints.

- /health reflects the configuration store
- Degraded (stale snapshot) still answers 200
- Unhealthy (nothing loaded) answers 503
"""

from __future__ import annotations

import time
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.components.config_store import ConfigurationStore
from src.shell.http.health import (
    CheckResult,
    HealthStatus,
    StartupTracker,
    configuration_probe,
    create_health_router,
    default_probes,
    overall_status,
    process_probe,
)
from tests.conftest import FakeClock

INVALID = '[links.api]\nredirect = "https://example.com"\n'

# --- Test Fixtures ---


@pytest.fixture
def app(store: ConfigurationStore) -> FastAPI:
    """Create test FastAPI app with health router."""
    app = FastAPI()
    app.include_router(create_health_router(default_probes(store), version="1.0.0-test"))
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_startup_tracker() -> None:
    """Reset startup tracker before each test."""
    StartupTracker.reset()


# --- Status Combination ---


class TestOverallStatus:
    """Tests for combining check results."""

    def test_all_healthy(self) -> None:
        results = [CheckResult("a", HealthStatus.HEALTHY), CheckResult("b", HealthStatus.HEALTHY)]
        assert overall_status(results) is HealthStatus.HEALTHY

    def test_degraded_wins_over_healthy(self) -> None:
        results = [CheckResult("a", HealthStatus.HEALTHY), CheckResult("b", HealthStatus.DEGRADED)]
        assert overall_status(results) is HealthStatus.DEGRADED

    def test_unhealthy_wins(self) -> None:
        results = [
            CheckResult("a", HealthStatus.DEGRADED),
            CheckResult("b", HealthStatus.UNHEALTHY),
        ]
        assert overall_status(results) is HealthStatus.UNHEALTHY

    def test_no_probes_is_healthy(self) -> None:
        assert overall_status([]) is HealthStatus.HEALTHY


# --- StartupTracker Tests ---


class TestStartupTracker:
    """Tests for StartupTracker."""

    def test_not_started_initially(self) -> None:
        """Uptime is zero before startup."""
        assert StartupTracker.get_uptime_seconds() == 0.0

    def test_uptime_increases(self) -> None:
        """Uptime increases after start."""
        StartupTracker.mark_started()
        time.sleep(0.01)
        uptime = StartupTracker.get_uptime_seconds()
        assert 0 < uptime < 1.0


# --- Checks ---


class TestProcessProbe:
    def test_always_healthy(self) -> None:
        assert process_probe().status is HealthStatus.HEALTHY


class TestConfigurationProbe:
    """Tests for the configuration store probe."""

    def test_not_loaded(self, store: ConfigurationStore) -> None:
        result = configuration_probe(store)()
        assert result.status is HealthStatus.UNHEALTHY

    def test_loaded(self, store: ConfigurationStore, links_file: Path, clock: FakeClock) -> None:
        store.load(links_file)
        result = configuration_probe(store)()
        assert result.status is HealthStatus.HEALTHY
        assert result.details["links"] == 4
        assert result.details["source"] == str(links_file)
        assert result.details["loaded_at"] == clock.now_utc().isoformat()
        assert result.details["watching"] is False

    def test_degraded_after_failed_reload(
        self, store: ConfigurationStore, links_file: Path
    ) -> None:
        store.load(links_file)
        links_file.write_text(INVALID)
        store.reload()

        result = configuration_probe(store)()

        assert result.status is HealthStatus.DEGRADED
        assert "Serving previous configuration" in result.message
        assert result.details["failed_reloads"] == 1
        assert result.details["links"] == 4


# --- Endpoint Tests ---


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    def test_unhealthy_before_load(self, client: TestClient) -> None:
        """503 until the configuration is loaded."""
        response = client.get("/health")
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_healthy(self, client: TestClient, store: ConfigurationStore, links_file: Path) -> None:
        """200 with version and checks once loaded."""
        store.load(links_file)
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0-test"
        assert {c["name"] for c in data["checks"]} == {"process", "configuration"}

    def test_degraded_still_200(
        self, client: TestClient, store: ConfigurationStore, links_file: Path
    ) -> None:
        """A stale snapshot is still being served."""
        store.load(links_file)
        links_file.write_text(INVALID)
        store.reload()
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "degraded"


class TestReadinessEndpoint:
    """Tests for /health/ready endpoint."""

    def test_not_ready_before_load(self, client: TestClient) -> None:
        response = client.get("/health/ready")
        assert response.status_code == 503
        assert response.json()["ready"] is False

    def test_ready_after_load(
        self, client: TestClient, store: ConfigurationStore, links_file: Path
    ) -> None:
        store.load(links_file)
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True


class TestLivenessEndpoint:
    """Tests for /health/live endpoint."""

    def test_always_alive(self, client: TestClient) -> None:
        response = client.get("/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True
