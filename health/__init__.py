# ============================================================================
# HEALTH MODULE
# ============================================================================
# STATUS: Core - Dependency health aggregation and shutdown coordination
# PURPOSE: Shared by every service: probes, readiness, liveness, teardown
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Module

Reusable dependency-health core for the platform services:
- /live: Process alive (instant, never runs probes)
- /ready: Ready to take traffic (SERVING phase + critical probes)
- /health: Full report (all probes, bounded by a batch deadline)

Architecture:
- Probe: Base class for a check against one dependency
- ProbeRegistry: Ordered, write-once probe declaration
- ProbeExecutor: Concurrent execution under one deadline
- LifecycleState: STARTING -> SERVING -> DRAINING -> STOPPED
- ShutdownCoordinator: Ordered, once-only teardown on SIGTERM
- ServiceRuntime: The above, wired for one service

Usage:
    from health import ServiceRuntime, health_router

    runtime = ServiceRuntime("trading-engine")
    runtime.register_probe(PostgresProbe(pool))
    runtime.add_resource("database", pool.close)

    app.state.runtime = runtime
    app.include_router(health_router)
"""

from health.core import (
    HealthStatus,
    Criticality,
    ProbeOutcome,
    HealthReport,
    Probe,
    CallableProbe,
)
from health.errors import (
    HealthError,
    ProbeTimeoutError,
    ProbeError,
    DuplicateProbeNameError,
    RegistrySealedError,
    LifecycleTransitionError,
    ShutdownResourceCloseError,
    StartupError,
)
from health.registry import ProbeRegistry
from health.executor import ProbeExecutor
from health.lifecycle import LifecyclePhase, LifecycleState
from health.shutdown import ManagedResource, ShutdownCoordinator
from health.runtime import ServiceRuntime
from health.router import health_router

__all__ = [
    # Core types
    "HealthStatus",
    "Criticality",
    "ProbeOutcome",
    "HealthReport",
    "Probe",
    "CallableProbe",
    # Errors
    "HealthError",
    "ProbeTimeoutError",
    "ProbeError",
    "DuplicateProbeNameError",
    "RegistrySealedError",
    "LifecycleTransitionError",
    "ShutdownResourceCloseError",
    "StartupError",
    # Registry / execution
    "ProbeRegistry",
    "ProbeExecutor",
    # Lifecycle / shutdown
    "LifecyclePhase",
    "LifecycleState",
    "ManagedResource",
    "ShutdownCoordinator",
    "ServiceRuntime",
    # Router
    "health_router",
]
