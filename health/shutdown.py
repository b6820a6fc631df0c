# ============================================================================
# SHUTDOWN COORDINATOR
# ============================================================================
# STATUS: Core - Ordered resource teardown
# PURPOSE: Drain and close shared resources once, in declared order
# CREATED: 18 OCT 2026
# ============================================================================
"""
Shutdown Coordinator

Reacts to the first SIGTERM/SIGINT:
1. Lifecycle -> DRAINING (readiness flips to not-ready at once)
2. Optional grace period so load balancers stop routing; the server
   keeps accepting and answering requests meanwhile
3. Stop callback: the host server stops accepting, finishes in-flight
   requests and then calls shutdown() from its own teardown
4. Close resources one at a time in declared order; a failed or hung
   close is logged and the next resource is still closed
5. Lifecycle -> STOPPED
6. Exit callback with code 0

Without a stop callback, steps 4-6 follow the grace period directly.
Later signals are ignored. The sequence runs once per process.

Usage:
    coordinator = ShutdownCoordinator(lifecycle, stop_callback=server_stop)
    coordinator.add_resource("database", pool.close)
    coordinator.add_resource("redis", cache.close)
    coordinator.install_signal_handlers()
"""

import asyncio
import inspect
import logging
import signal
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from health.errors import ShutdownResourceCloseError
from health.lifecycle import LifecyclePhase, LifecycleState

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STARTUP_FAILURE = 1

DEFAULT_SIGNALS = (signal.SIGTERM, signal.SIGINT)


@dataclass(frozen=True)
class ManagedResource:
    """A named resource with a close operation (sync or async)."""
    name: str
    close: Callable[[], Any]


class ShutdownCoordinator:
    """
    Runs the termination sequence for one process.

    Args:
        lifecycle: Lifecycle state to move to DRAINING and STOPPED
        resources: Resources in close order
        drain_grace_seconds: Pause after DRAINING before stopping or closing
        close_timeout_seconds: Upper bound for each async close
        stop_callback: Tells the host server to stop accepting requests
        exit_callback: Called with the exit code as the final step
    """

    def __init__(
        self,
        lifecycle: LifecycleState,
        resources: Sequence[ManagedResource] = (),
        drain_grace_seconds: float = 0.0,
        close_timeout_seconds: float = 10.0,
        stop_callback: Optional[Callable[[], Any]] = None,
        exit_callback: Optional[Callable[[int], Any]] = None,
    ):
        self.lifecycle = lifecycle
        self._resources: List[ManagedResource] = list(resources)
        self.drain_grace_seconds = drain_grace_seconds
        self.close_timeout_seconds = close_timeout_seconds
        self.stop_callback = stop_callback
        self.exit_callback = exit_callback

        self._triggered = False
        self._closing = False
        self._done = asyncio.Event()
        self._task: Optional[asyncio.Task] = None
        self._exit_code: Optional[int] = None
        self._close_errors: List[ShutdownResourceCloseError] = []

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def add_resource(self, name: str, close: Callable[[], Any]) -> None:
        """Append a resource to the close order."""
        if self._triggered:
            raise RuntimeError(f"Cannot add resource {name}: shutdown already started")
        self._resources.append(ManagedResource(name=name, close=close))

    @property
    def resources(self) -> List[ManagedResource]:
        return list(self._resources)

    @property
    def triggered(self) -> bool:
        return self._triggered

    @property
    def exit_code(self) -> Optional[int]:
        return self._exit_code

    @property
    def close_errors(self) -> List[ShutdownResourceCloseError]:
        return list(self._close_errors)

    # ------------------------------------------------------------------
    # Signals
    # ------------------------------------------------------------------

    def install_signal_handlers(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        signals: Sequence[int] = DEFAULT_SIGNALS,
    ) -> bool:
        """
        Route termination signals to request_shutdown().

        Returns:
            True if handlers were installed
        """
        loop = loop or asyncio.get_running_loop()

        for sig in signals:
            try:
                loop.add_signal_handler(sig, self.request_shutdown, sig)
            except NotImplementedError:
                # Windows event loops have no add_signal_handler
                try:
                    signal.signal(
                        sig,
                        lambda signum, frame: loop.call_soon_threadsafe(
                            self.request_shutdown, signum
                        ),
                    )
                except (ValueError, OSError) as e:
                    logger.debug(f"Could not register handler for {sig}: {e}")
                    return False
            except (ValueError, RuntimeError) as e:
                # Signal handlers can only be registered in the main thread
                logger.debug(f"Could not register handler for {sig}: {e}")
                return False

        logger.info(
            f"Shutdown handlers installed for "
            f"{', '.join(signal.Signals(s).name for s in signals)}"
        )
        return True

    def request_shutdown(self, sig: Optional[int] = None) -> Optional[asyncio.Task]:
        """
        Signal entry point. Starts the sequence on the first call only.

        Returns:
            The shutdown task, or None when the request was ignored
        """
        name = signal.Signals(sig).name if sig is not None else "request"
        if self._triggered:
            logger.info(f"{name} received during shutdown, ignoring")
            return None

        # Set before scheduling so a second signal in the same loop tick is ignored
        self._triggered = True
        logger.info(f"{name} received, shutting down gracefully")
        self._task = asyncio.get_running_loop().create_task(self.drain_and_stop())
        return self._task

    # ------------------------------------------------------------------
    # Sequence
    # ------------------------------------------------------------------

    async def drain(self) -> None:
        """Enter DRAINING and wait out the grace period (SERVING only)."""
        if self.lifecycle.phase != LifecyclePhase.SERVING:
            return

        self.lifecycle.begin_draining()
        if self.drain_grace_seconds > 0:
            logger.info(f"Draining for {self.drain_grace_seconds}s before stopping")
            await asyncio.sleep(self.drain_grace_seconds)

    async def drain_and_stop(self) -> Optional[int]:
        """
        Signal-driven sequence.

        With a stop callback the host server is told to stop once the
        grace period is over; it finishes in-flight requests and then
        calls shutdown() from its own teardown, so resources stay open
        while requests are still being answered.

        Returns:
            The exit code, or None when closing was handed to the host
        """
        if self.lifecycle.phase == LifecyclePhase.SERVING and self.stop_callback is not None:
            await self.drain()
            logger.info("Grace period over, stopping server")
            self.stop_callback()
            return None

        return await self.shutdown()

    async def shutdown(self) -> int:
        """
        Drain if still serving, then close resources and finish.

        A second caller waits for the first sequence and gets its exit
        code; nothing is closed twice.
        """
        if self._closing:
            await self._done.wait()
            return self._exit_code

        self._closing = True
        self._triggered = True

        if self.lifecycle.phase == LifecyclePhase.STARTING:
            # Never served: release what was opened and report failure
            logger.warning("Shutdown before serving, closing resources")
            await self.close_resources()
            return self._finish(EXIT_STARTUP_FAILURE)

        await self.drain()
        await self.close_resources()

        if self.lifecycle.phase == LifecyclePhase.DRAINING:
            self.lifecycle.mark_stopped()

        return self._finish(EXIT_OK)

    async def close_resources(self) -> List[ShutdownResourceCloseError]:
        """
        Close every declared resource in order, best effort.

        Returns:
            Errors for resources that failed or timed out
        """
        errors: List[ShutdownResourceCloseError] = []

        for resource in self._resources:
            try:
                await self._close_one(resource)
                logger.info(f"Closed resource: {resource.name}")
            except asyncio.TimeoutError:
                error = ShutdownResourceCloseError(
                    resource.name,
                    TimeoutError(f"close exceeded {self.close_timeout_seconds}s"),
                )
                logger.error(str(error))
                errors.append(error)
            except Exception as e:
                error = ShutdownResourceCloseError(resource.name, e)
                logger.error(str(error), exc_info=True)
                errors.append(error)

        self._close_errors.extend(errors)
        return errors

    async def _close_one(self, resource: ManagedResource) -> None:
        result = resource.close()
        if inspect.isawaitable(result):
            await asyncio.wait_for(result, timeout=self.close_timeout_seconds)

    def _finish(self, code: int) -> int:
        self._exit_code = code
        self._done.set()

        if self._close_errors:
            logger.warning(
                f"Shutdown finished with {len(self._close_errors)} close error(s): "
                f"{[e.resource_name for e in self._close_errors]}"
            )
        logger.info(f"Shutdown complete, exiting with code {code}")

        if self.exit_callback is not None:
            self.exit_callback(code)
        return code

    async def wait_stopped(self) -> int:
        """Block until the sequence has finished; returns the exit code."""
        await self._done.wait()
        return self._exit_code


__all__ = [
    "ManagedResource",
    "ShutdownCoordinator",
    "EXIT_OK",
    "EXIT_STARTUP_FAILURE",
]
