# ============================================================================
# HEALTH ERRORS
# ============================================================================
# STATUS: Core - Error taxonomy for probes, lifecycle and shutdown
# PURPOSE: Typed exceptions raised or recorded by the health core
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Errors

ProbeTimeoutError and ProbeError never escape the executor; they are
recorded as data on the probe's outcome. The registration, lifecycle and
startup errors are programmer or startup failures and do propagate.
"""

from typing import Optional


class HealthError(Exception):
    """Base exception for the health core."""
    pass


class ProbeTimeoutError(HealthError):
    """A probe did not answer within its effective timeout."""

    def __init__(self, probe_name: str, timeout_seconds: float):
        self.probe_name = probe_name
        self.timeout_seconds = timeout_seconds
        super().__init__("Timeout")


class ProbeError(HealthError):
    """A probe's underlying dependency call raised."""

    def __init__(self, probe_name: str, cause: BaseException):
        self.probe_name = probe_name
        self.cause = cause
        super().__init__(str(cause) or type(cause).__name__)


class DuplicateProbeNameError(HealthError, ValueError):
    """Raised when a probe name is already registered."""

    def __init__(self, probe_name: str):
        self.probe_name = probe_name
        super().__init__(f"Probe already registered: {probe_name}")


class RegistrySealedError(HealthError):
    """Raised when registering after the registry has been sealed."""

    def __init__(self, probe_name: str):
        self.probe_name = probe_name
        super().__init__(f"Probe registry is sealed, cannot register: {probe_name}")


class LifecycleTransitionError(HealthError):
    """Raised on a phase change outside Starting -> Serving -> Draining -> Stopped."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Illegal lifecycle transition: {current} -> {requested}")


class ShutdownResourceCloseError(HealthError):
    """A resource failed to close during shutdown. Logged, never raised."""

    def __init__(self, resource_name: str, cause: Optional[BaseException] = None):
        self.resource_name = resource_name
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to close resource {resource_name}{detail}")


class StartupError(HealthError):
    """A critical dependency could not be established before serving."""

    def __init__(self, message: str, failed_probes: Optional[list] = None):
        self.failed_probes = failed_probes or []
        super().__init__(message)


__all__ = [
    "HealthError",
    "ProbeTimeoutError",
    "ProbeError",
    "DuplicateProbeNameError",
    "RegistrySealedError",
    "LifecycleTransitionError",
    "ShutdownResourceCloseError",
    "StartupError",
]
