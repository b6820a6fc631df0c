# ============================================================================
# SERVICE APPLICATION FACTORY
# ============================================================================
# STATUS: Core - FastAPI app shared by every service
# PURPOSE: Lifespan, middleware, error handlers and health routes
# CREATED: 18 OCT 2026
# ============================================================================
"""
Service Application Factory

Every service is a FastAPI app built around a ServiceRuntime:

    runtime = build_runtime(settings)
    app = create_service_app(runtime, title="Trading Engine")

Lifespan:
- startup: runtime.start() (startup steps + critical probe verification),
  then SIGTERM/SIGINT are routed to the shutdown coordinator
- shutdown: runtime.shutdown.shutdown() closes resources once uvicorn has
  answered the requests still in flight

Errors never leak stack traces: unknown paths get a JSON 404 and
unhandled exceptions a JSON 500.
"""

import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import Settings
from core.logging import get_logger, log_checkpoint, log_context, ComponentType
from health import ServiceRuntime, health_router
from __version__ import __version__

logger = get_logger(__name__, ComponentType.SERVICE)


def runtime_from_settings(settings: Settings) -> ServiceRuntime:
    """Create an empty ServiceRuntime configured from settings."""
    svc = settings.service
    return ServiceRuntime(
        service_name=svc.service_name,
        environment=svc.environment,
        health_deadline=svc.health_deadline_seconds,
        readiness_deadline=svc.readiness_deadline_seconds,
        startup_deadline=svc.startup_deadline_seconds,
        drain_grace_seconds=svc.shutdown_drain_seconds,
        close_timeout_seconds=svc.shutdown_close_timeout_seconds,
    )


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def create_service_app(
    runtime: ServiceRuntime,
    title: str = None,
    install_signal_handlers: bool = True,
) -> FastAPI:
    """
    Build the FastAPI app for a service.

    Args:
        runtime: The service's runtime (probes, lifecycle, shutdown)
        title: OpenAPI title, defaults to the service name
        install_signal_handlers: Route SIGTERM/SIGINT to the coordinator
            once serving (disable under test clients)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        with log_context(service=runtime.service_name):
            logger.info(
                f"Starting {runtime.service_name} v{__version__} "
                f"(environment={runtime.environment})"
            )
            await runtime.start()
            if install_signal_handlers:
                runtime.shutdown.install_signal_handlers()
            log_checkpoint("service_serving", {"probes": list(runtime.registry.names())})

        yield

        with log_context(service=runtime.service_name):
            await runtime.shutdown.shutdown()
            log_checkpoint("service_stopped")

    app = FastAPI(
        title=title or runtime.service_name,
        version=__version__,
        lifespan=lifespan,
    )
    app.state.runtime = runtime

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or f"req_{uuid.uuid4().hex[:12]}"
        start = time.monotonic()
        with log_context(service=runtime.service_name, request_id=request_id):
            response = await call_next(request)
            duration_ms = (time.monotonic() - start) * 1000
            logger.info(
                f"{request.method} {request.url.path} {response.status_code}",
                extra={"duration_ms": round(duration_ms, 2)},
            )
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={"error": "Not found", "path": request.url.path, "timestamp": _now()},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail, "timestamp": _now()},
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "timestamp": _now()},
        )

    app.include_router(health_router)

    @app.get("/")
    async def root():
        return {
            "service": runtime.service_name,
            "version": __version__,
            "phase": runtime.lifecycle.phase.value,
            "health": "/health",
        }

    return app


__all__ = [
    "runtime_from_settings",
    "create_service_app",
]
