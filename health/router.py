# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# STATUS: Core - FastAPI health, readiness and liveness endpoints
# PURPOSE: Translate HealthReport + lifecycle phase into HTTP responses
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Router

FastAPI router providing three probe tiers. The ServiceRuntime is read
from `request.app.state.runtime`.

Endpoints:
    GET /live  (/livez)  - Liveness: 200 unless the process is STOPPED.
                           Never runs probes, so a stuck dependency cannot
                           get a working process killed.

    GET /ready (/readyz) - Readiness: 503 outside SERVING without running
                           probes; in SERVING, critical probes only.

    GET /health          - Full report of every probe. 200 when no
                           critical probe fails, else 503.

    HEAD /health         - Cheap reachability check, no probes.

    GET /health/{probe_name} - Single probe status.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from health.core import HealthStatus
from health.runtime import ServiceRuntime
from health.schemas import (
    HealthResponse,
    LivenessResponse,
    ReadinessResponse,
    UnhealthyResponse,
)
from __version__ import __version__

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["Health"])

NOT_READY = ReadinessResponse(status="not ready").model_dump()


def _runtime(request: Request) -> ServiceRuntime:
    return request.app.state.runtime


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _status_to_http_code(status: HealthStatus) -> int:
    """Map health status to HTTP status code."""
    return 503 if status == HealthStatus.UNHEALTHY else 200


# ============================================================================
# LIVENESS PROBE
# ============================================================================

@health_router.get("/live", response_model=LivenessResponse)
@health_router.get("/livez", include_in_schema=False)
async def liveness_probe(request: Request):
    """
    Liveness probe.

    Returns 200 while the process exists. Only the STOPPED phase turns
    this to 503; dependencies are never consulted.
    """
    runtime = _runtime(request)
    if not runtime.lifecycle.is_alive:
        return JSONResponse(
            status_code=503,
            content=LivenessResponse(status="stopped").model_dump(),
        )
    return LivenessResponse()


# ============================================================================
# READINESS PROBE
# ============================================================================

@health_router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
@health_router.get("/readyz", include_in_schema=False)
async def readiness_probe(request: Request):
    """
    Readiness probe.

    STARTING, DRAINING and STOPPED answer 503 straight away. SERVING runs
    the critical probes only; informational probes do not gate routing.
    """
    runtime = _runtime(request)

    if not runtime.lifecycle.is_ready:
        return JSONResponse(status_code=503, content=NOT_READY)

    report = await runtime.executor.run_critical(runtime.readiness_deadline)

    if not report.is_healthy:
        logger.warning(f"Not ready, failing probes: {report.failing_probes()}")
        return JSONResponse(status_code=503, content=NOT_READY)

    return ReadinessResponse()


# ============================================================================
# FULL HEALTH CHECK
# ============================================================================

@health_router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": UnhealthyResponse}},
)
async def full_health_check(request: Request):
    """
    Comprehensive health check.

    Runs every registered probe under the health deadline and returns the
    full report. The report is computed on each call, never cached.

    Returns:
        200: No critical probe failing
        503: At least one critical probe failing
    """
    runtime = _runtime(request)
    report = await runtime.executor.run_all(runtime.health_deadline)

    if not report.is_healthy:
        logger.error(f"Health check failed, failing probes: {report.failing_probes()}")
        body = UnhealthyResponse(
            timestamp=_now(),
            service=runtime.service_name,
            phase=runtime.lifecycle.phase.value,
            checks=report.to_dict()["checks"],
        )
        return JSONResponse(
            status_code=503,
            content=body.model_dump(mode="json", exclude_none=True),
        )

    body = HealthResponse(
        service=runtime.service_name,
        version=__version__,
        environment=runtime.environment,
        phase=runtime.lifecycle.phase.value,
        **report.to_dict(),
    )
    return JSONResponse(
        status_code=200,
        content=body.model_dump(mode="json", exclude_none=True),
    )


@health_router.head("/health", include_in_schema=False)
async def health_head(request: Request):
    """Reachability check for load balancers that only send HEAD."""
    runtime = _runtime(request)
    return Response(status_code=200 if runtime.lifecycle.is_alive else 503)


# ============================================================================
# SINGLE PROBE
# ============================================================================

@health_router.get("/health/{probe_name}")
async def single_health_check(probe_name: str, request: Request):
    """
    Run a single probe by name.

    Useful for debugging specific dependencies.
    """
    runtime = _runtime(request)
    outcome = await runtime.executor.run_single(probe_name, runtime.health_deadline)

    if outcome is None:
        return JSONResponse(
            status_code=404,
            content={"error": f"Probe not found: {probe_name}"},
        )

    probe = runtime.registry.get(probe_name)
    body = outcome.to_dict()
    body["criticality"] = probe.criticality.value

    code = 200
    if probe.is_critical and outcome.status != HealthStatus.HEALTHY:
        code = _status_to_http_code(HealthStatus.UNHEALTHY)
    return JSONResponse(status_code=code, content=body)


__all__ = [
    "health_router",
]
