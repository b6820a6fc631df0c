# ============================================================================
# SERVICE RUNNER
# ============================================================================
# STATUS: Core - Process entry for a service
# PURPOSE: Serve a service app with uvicorn and return its exit code
# CREATED: 18 OCT 2026
# ============================================================================
"""
Service Runner

Runs a service app under uvicorn.Server and derives the process exit
code from the runtime:
- 0: shutdown coordinator finished a clean termination sequence
- 1: startup failed before the service reached SERVING

A termination signal moves the runtime to DRAINING, waits out the grace
period and then tells uvicorn to stop. uvicorn stops accepting, answers
the requests already in flight and runs the lifespan exit, which closes
the shared resources. The caller passes the returned code to sys.exit().
"""

import asyncio
import logging

import uvicorn
from fastapi import FastAPI

from core.config import ServiceSettings
from health import LifecyclePhase, ServiceRuntime
from health.shutdown import EXIT_OK, EXIT_STARTUP_FAILURE

logger = logging.getLogger(__name__)


async def serve(app: FastAPI, settings: ServiceSettings) -> int:
    """Serve until the shutdown coordinator finishes; return the exit code."""
    runtime: ServiceRuntime = app.state.runtime

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        lifespan="on",
        log_config=None,
    )
    server = uvicorn.Server(config)

    def _stop_server(*_) -> None:
        server.should_exit = True

    # Signal: drain, then stop accepting; the lifespan exit closes resources
    # after in-flight requests are answered
    runtime.shutdown.stop_callback = _stop_server
    runtime.shutdown.exit_callback = _stop_server

    await server.serve()

    if runtime.lifecycle.phase == LifecyclePhase.STARTING:
        logger.error(f"{runtime.service_name} failed to start")
        return EXIT_STARTUP_FAILURE

    code = runtime.shutdown.exit_code
    return EXIT_OK if code is None else code


def run_service(app: FastAPI, settings: ServiceSettings) -> int:
    """Synchronous entry point."""
    return asyncio.run(serve(app, settings))


__all__ = [
    "serve",
    "run_service",
]
