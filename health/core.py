# ============================================================================
# HEALTH CHECK CORE TYPES
# ============================================================================
# STATUS: Core - Probe contract and result types
# PURPOSE: Probe interface, per-probe outcomes and the aggregated report
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Check Core Types

Defines the probe interface and result types for dependency health.

Status values:
- healthy: dependency answered as expected
- degraded: dependency answered with warnings (non-blocking issues)
- unhealthy: dependency failed, timed out or answered negatively

Criticality:
- critical: failure makes the service unhealthy and not ready
- informational: failure only shows up in the per-probe detail
"""

import asyncio
import inspect
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

import psutil

_BYTES_PER_MB = 1024 * 1024


class HealthStatus(str, Enum):
    """Health check status values."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class Criticality(str, Enum):
    """Whether a probe gates readiness or is advisory only."""
    CRITICAL = "critical"
    INFORMATIONAL = "informational"


@dataclass
class ProbeOutcome:
    """Result from a single probe invocation."""
    status: HealthStatus
    message: Optional[str] = None
    detail: Dict[str, Any] = field(default_factory=dict)
    latency_ms: float = 0.0
    error: Optional[str] = None

    @classmethod
    def healthy(cls, message: str = None, **detail) -> "ProbeOutcome":
        """Create healthy outcome."""
        return cls(status=HealthStatus.HEALTHY, message=message, detail=detail)

    @classmethod
    def degraded(cls, message: str, **detail) -> "ProbeOutcome":
        """Create degraded outcome."""
        return cls(status=HealthStatus.DEGRADED, message=message, detail=detail)

    @classmethod
    def unhealthy(cls, message: str, **detail) -> "ProbeOutcome":
        """Create a negative answer (the probe ran, the dependency said no)."""
        return cls(status=HealthStatus.UNHEALTHY, message=message, detail=detail)

    @classmethod
    def from_exception(cls, e: BaseException) -> "ProbeOutcome":
        """Create unhealthy outcome for a probe that raised."""
        return cls(
            status=HealthStatus.UNHEALTHY,
            error=str(e) or type(e).__name__,
            detail={"exception_type": type(e).__name__},
        )

    @classmethod
    def timed_out(cls) -> "ProbeOutcome":
        """Create unhealthy outcome for a probe that missed its deadline."""
        return cls(status=HealthStatus.UNHEALTHY, error="Timeout")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result = {
            "status": self.status.value,
            "latency_ms": round(self.latency_ms, 2),
        }
        if self.message:
            result["message"] = self.message
        if self.error:
            result["error"] = self.error
        if self.detail:
            result["detail"] = self.detail
        return result


def process_uptime_seconds() -> float:
    """Seconds since this process was created."""
    proc = psutil.Process(os.getpid())
    return max(0.0, datetime.now(timezone.utc).timestamp() - proc.create_time())


def process_memory() -> Dict[str, Any]:
    """Current process memory figures, in MB."""
    info = psutil.Process(os.getpid()).memory_info()
    return {
        "rss": round(info.rss / _BYTES_PER_MB),
        "vms": round(info.vms / _BYTES_PER_MB),
        "unit": "MB",
    }


@dataclass
class HealthReport:
    """
    Aggregated, point-in-time result of a probe batch.

    overall_status is only ever HEALTHY or UNHEALTHY: degraded or failing
    informational probes are visible in per_probe but never flip it.
    """
    overall_status: HealthStatus
    per_probe: Dict[str, ProbeOutcome]
    criticality: Dict[str, Criticality] = field(default_factory=dict)
    total_duration_ms: float = 0.0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    process_uptime_seconds: float = field(default_factory=process_uptime_seconds)
    memory: Dict[str, Any] = field(default_factory=process_memory)

    @property
    def is_healthy(self) -> bool:
        return self.overall_status == HealthStatus.HEALTHY

    def failing_probes(self) -> List[str]:
        """Names of probes whose outcome is not healthy, in registry order."""
        return [
            name for name, outcome in self.per_probe.items()
            if outcome.status != HealthStatus.HEALTHY
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        checks = {}
        for name, outcome in self.per_probe.items():
            entry = outcome.to_dict()
            if name in self.criticality:
                entry["criticality"] = self.criticality[name].value
            checks[name] = entry

        return {
            "status": self.overall_status.value,
            "timestamp": self.timestamp.isoformat().replace("+00:00", "Z"),
            "uptime": round(self.process_uptime_seconds),
            "memory": self.memory,
            "checks": checks,
            "total_duration_ms": round(self.total_duration_ms, 2),
        }


CheckResult = Union[ProbeOutcome, bool, Dict[str, Any], None]


class Probe(ABC):
    """
    Base class for dependency probes.

    Subclass and implement check() for each external dependency. A probe
    returns a ProbeOutcome for a negative answer and raises for a failed
    call; the executor turns raises and timeouts into unhealthy outcomes.

    Attributes:
        name: Unique identifier within a registry
        criticality: CRITICAL gates readiness, INFORMATIONAL is advisory
        timeout_seconds: Natural timeout; a shorter batch deadline wins

    Example:
        class PostgresProbe(Probe):
            name = "database"
            timeout_seconds = 2.0

            async def check(self) -> ProbeOutcome:
                await pool.ping()
                return ProbeOutcome.healthy()
    """

    name: str = "unnamed"
    criticality: Criticality = Criticality.CRITICAL
    timeout_seconds: float = 5.0

    @abstractmethod
    async def check(self) -> ProbeOutcome:
        """
        Execute the probe.

        Returns:
            ProbeOutcome with status and optional detail
        """
        pass

    @property
    def is_critical(self) -> bool:
        return self.criticality == Criticality.CRITICAL

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} criticality={self.criticality.value}>"


class CallableProbe(Probe):
    """
    Probe wrapping a plain function.

    The function may be sync or async. Sync functions run on a worker
    thread so a blocking driver call cannot stall the event loop. Return
    values are coerced: ProbeOutcome as-is, bool to healthy/unhealthy,
    dict or None to healthy with that detail.
    """

    def __init__(
        self,
        name: str,
        fn: Callable[[], Union[CheckResult, Awaitable[CheckResult]]],
        criticality: Criticality = Criticality.CRITICAL,
        timeout_seconds: float = 5.0,
    ):
        self.name = name
        self.criticality = Criticality(criticality)
        self.timeout_seconds = timeout_seconds
        self._fn = fn

    async def check(self) -> ProbeOutcome:
        if inspect.iscoroutinefunction(self._fn):
            value = await self._fn()
        else:
            value = await asyncio.to_thread(self._fn)
            if inspect.isawaitable(value):
                value = await value
        return _coerce(value)


def _coerce(value: CheckResult) -> ProbeOutcome:
    if isinstance(value, ProbeOutcome):
        return value
    if isinstance(value, bool):
        if value:
            return ProbeOutcome.healthy()
        return ProbeOutcome.unhealthy("Check returned false")
    if isinstance(value, dict):
        return ProbeOutcome.healthy(**value)
    if value is None:
        return ProbeOutcome.healthy()
    raise TypeError(f"Unsupported probe result type: {type(value).__name__}")


__all__ = [
    "HealthStatus",
    "Criticality",
    "ProbeOutcome",
    "HealthReport",
    "Probe",
    "CallableProbe",
    "process_uptime_seconds",
    "process_memory",
]
