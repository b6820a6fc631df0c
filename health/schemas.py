# ============================================================================
# HEALTH RESPONSE MODELS
# ============================================================================
# STATUS: Core - Pydantic models for the health endpoints
# PURPOSE: OpenAPI contract for /live, /ready and /health bodies
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Response Models

Pydantic models for the health API. Orchestrators only read the status
code; these bodies are for humans and dashboards.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class LivenessResponse(BaseModel):
    """Liveness probe body."""

    status: str = Field(default="alive", examples=["alive", "stopped"])


class ReadinessResponse(BaseModel):
    """Readiness probe body."""

    status: str = Field(default="ready", examples=["ready", "not ready"])


class ProbeCheck(BaseModel):
    """One probe's outcome as reported under `checks`."""

    status: str = Field(..., examples=["healthy", "degraded", "unhealthy"])
    latency_ms: float = Field(..., description="Probe wall time in milliseconds")
    criticality: Optional[str] = Field(default=None, examples=["critical", "informational"])
    message: Optional[str] = None
    error: Optional[str] = Field(default=None, examples=["Timeout", "connection refused"])
    detail: Dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Full health report of a serving, healthy service."""

    status: str = Field(..., examples=["healthy"])
    service: str
    version: str
    environment: str
    phase: str = Field(..., examples=["serving"])
    timestamp: str = Field(..., description="ISO-8601 UTC")
    uptime: int = Field(..., description="Process uptime in seconds")
    memory: Dict[str, Any] = Field(default_factory=dict)
    checks: Dict[str, ProbeCheck] = Field(default_factory=dict)
    total_duration_ms: float


class UnhealthyResponse(BaseModel):
    """Body returned with 503 when a critical probe is failing."""

    status: str = Field(default="unhealthy")
    timestamp: str
    service: str
    error: str = Field(default="Service unavailable")
    phase: str
    checks: Dict[str, ProbeCheck] = Field(default_factory=dict)


__all__ = [
    "LivenessResponse",
    "ReadinessResponse",
    "ProbeCheck",
    "HealthResponse",
    "UnhealthyResponse",
]
