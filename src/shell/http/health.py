"""
Health endpoints.

Reports on the process and on the links configuration it serves from.
Mounted under the reserved /api prefix, so no link ID can shadow them.

- GET /health        full report, 503 only when nothing can be served
- GET /health/ready  ready once a configuration snapshot is loaded
- GET /health/live   200 while the process answers
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from src.components.config_store import ConfigurationStore


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"  # stale snapshot still being served
    UNHEALTHY = "unhealthy"


@dataclass
class CheckResult:
    """Outcome of one named probe."""

    name: str
    status: HealthStatus
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    def as_dict(self, with_details: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
        }
        if with_details:
            data["details"] = self.details
        return data


Probe = Callable[[], CheckResult]


# --- Uptime ---


class StartupTracker:
    """Wall-clock time since the server finished starting."""

    _started_at: float | None = None

    @classmethod
    def mark_started(cls) -> None:
        cls._started_at = time.time()

    @classmethod
    def get_uptime_seconds(cls) -> float:
        started = cls._started_at
        return 0.0 if started is None else time.time() - started

    @classmethod
    def reset(cls) -> None:
        cls._started_at = None


# --- Probes ---


def process_probe() -> CheckResult:
    # Reaching this line is the whole check
    return CheckResult(name="process", status=HealthStatus.HEALTHY, message="Process is running")


def configuration_probe(store: ConfigurationStore) -> Probe:
    """
    Build a probe over the configuration store.

    Unhealthy before the first load. Degraded while the file on disk
    fails to parse and the previous snapshot is still in use.
    """

    def probe() -> CheckResult:
        if not store.is_loaded:
            return CheckResult(
                name="configuration",
                status=HealthStatus.UNHEALTHY,
                message="Configuration not loaded",
            )

        snapshot = store.current_snapshot()
        stats = store.stats()
        details: dict[str, Any] = {
            "links": len(snapshot),
            "source": snapshot.source,
            "loaded_at": snapshot.loaded_at.isoformat() if snapshot.loaded_at else None,
            "reloads": stats.reloads,
            "failed_reloads": stats.failed_reloads,
            "watching": store.is_watching,
        }
        if stats.last_error is not None:
            return CheckResult(
                name="configuration",
                status=HealthStatus.DEGRADED,
                message=f"Serving previous configuration: {stats.last_error}",
                details=details,
            )
        return CheckResult(
            name="configuration",
            status=HealthStatus.HEALTHY,
            message="Configuration loaded",
            details=details,
        )

    return probe


def overall_status(results: list[CheckResult]) -> HealthStatus:
    """Worst status wins."""
    statuses = {r.status for r in results}
    if HealthStatus.UNHEALTHY in statuses:
        return HealthStatus.UNHEALTHY
    if HealthStatus.DEGRADED in statuses:
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY


def default_probes(store: ConfigurationStore) -> list[Probe]:
    return [process_probe, configuration_probe(store)]


# --- Router ---


def create_health_router(probes: list[Probe], version: str) -> APIRouter:
    """
    Build the health router.

    Args:
        probes: Callables run on every request, in order.
        version: Reported service version.
    """
    router = APIRouter()

    def run_probes() -> list[CheckResult]:
        return [probe() for probe in probes]

    @router.get(
        "/health",
        response_model=None,
        responses={503: {"description": "No configuration is loaded"}},
    )
    def health() -> JSONResponse:
        results = run_probes()
        overall = overall_status(results)
        body = {
            "status": overall.value,
            "version": version,
            "uptime_seconds": StartupTracker.get_uptime_seconds(),
            "checks": [r.as_dict() for r in results],
        }
        code = (
            status.HTTP_503_SERVICE_UNAVAILABLE
            if overall is HealthStatus.UNHEALTHY
            else status.HTTP_200_OK
        )
        return JSONResponse(body, status_code=code)

    @router.get("/health/ready", response_model=None)
    def ready() -> JSONResponse:
        results = run_probes()
        is_ready = overall_status(results) is not HealthStatus.UNHEALTHY
        body = {"ready": is_ready, "checks": [r.as_dict(with_details=False) for r in results]}
        code = status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE
        return JSONResponse(body, status_code=code)

    @router.get("/health/live", response_model=None)
    def live() -> JSONResponse:
        return JSONResponse({"alive": True, "uptime_seconds": StartupTracker.get_uptime_seconds()})

    return router
