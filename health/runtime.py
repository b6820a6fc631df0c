# ============================================================================
# SERVICE RUNTIME
# ============================================================================
# STATUS: Core - Per-service wiring of the health core
# PURPOSE: Bundle registry, lifecycle, executor and shutdown for one service
# CREATED: 18 OCT 2026
# ============================================================================
"""
Service Runtime

One ServiceRuntime per process. A service declares:
- its probes (register_probe)
- its startup steps, run in order before serving (add_startup_step)
- its resources, closed in order on shutdown (add_resource)

start() runs the startup steps, verifies every critical probe, seals the
registry and flips the lifecycle to SERVING. If a step fails or a
critical probe is not healthy, the opened resources are closed and
StartupError is raised; the process must then exit non-zero.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from health.core import Probe
from health.errors import StartupError
from health.executor import ProbeExecutor
from health.lifecycle import LifecycleState
from health.registry import ProbeRegistry
from health.shutdown import ShutdownCoordinator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartupStep:
    """A named startup action (sync or async), e.g. opening a pool."""
    name: str
    run: Callable[[], Any]


class ServiceRuntime:
    """
    Health and shutdown state for a single service process.

    Args:
        service_name: Name reported in health responses
        environment: Deployment environment reported in health responses
        health_deadline: Batch deadline for /health
        readiness_deadline: Batch deadline for /ready
        startup_deadline: Batch deadline for the startup verification
        drain_grace_seconds: Passed to the shutdown coordinator
        close_timeout_seconds: Passed to the shutdown coordinator
    """

    def __init__(
        self,
        service_name: str,
        environment: str = "development",
        health_deadline: float = 5.0,
        readiness_deadline: float = 2.0,
        startup_deadline: float = 10.0,
        drain_grace_seconds: float = 0.0,
        close_timeout_seconds: float = 10.0,
        exit_callback: Optional[Callable[[int], Any]] = None,
    ):
        self.service_name = service_name
        self.environment = environment
        self.health_deadline = health_deadline
        self.readiness_deadline = readiness_deadline
        self.startup_deadline = startup_deadline

        self.registry = ProbeRegistry()
        self.lifecycle = LifecycleState()
        self.executor = ProbeExecutor(self.registry, default_deadline=health_deadline)
        self.shutdown = ShutdownCoordinator(
            self.lifecycle,
            drain_grace_seconds=drain_grace_seconds,
            close_timeout_seconds=close_timeout_seconds,
            exit_callback=exit_callback,
        )
        self._startup_steps: List[StartupStep] = []

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def register_probe(self, probe: Probe) -> Probe:
        return self.registry.register(probe)

    def add_startup_step(self, name: str, run: Callable[[], Any]) -> None:
        self._startup_steps.append(StartupStep(name=name, run=run))

    def add_resource(self, name: str, close: Callable[[], Any]) -> None:
        self.shutdown.add_resource(name, close)

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """
        Run startup steps, verify critical probes, enter SERVING.

        Raises:
            StartupError: A step raised or a critical probe is not healthy
        """
        logger.info(f"Starting {self.service_name} ({len(self.registry)} probes registered)")

        for step in self._startup_steps:
            try:
                result = step.run()
                if inspect.isawaitable(result):
                    await result
                logger.info(f"Startup step complete: {step.name}")
            except Exception as e:
                logger.error(f"Startup step {step.name} failed: {e}")
                await self._abort()
                raise StartupError(f"Startup step {step.name} failed: {e}") from e

        if self.registry.critical():
            report = await self.executor.run_critical(self.startup_deadline)
            if not report.is_healthy:
                failed = report.failing_probes()
                logger.error(f"Critical dependencies unavailable at startup: {failed}")
                await self._abort()
                raise StartupError(
                    f"Critical dependencies unavailable: {', '.join(failed)}",
                    failed_probes=failed,
                )

        self.registry.seal()
        self.lifecycle.mark_serving()
        logger.info(f"{self.service_name} serving")

    async def _abort(self) -> None:
        errors = await self.shutdown.close_resources()
        if errors:
            logger.warning(f"{len(errors)} resource(s) failed to close after startup failure")


__all__ = [
    "StartupStep",
    "ServiceRuntime",
]
