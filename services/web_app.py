# ============================================================================
# WEB APP FRONT END
# ============================================================================
# STATUS: Service - Front end health wiring
# PURPOSE: Health endpoints for the web front end
# CREATED: 18 OCT 2026
# ============================================================================
"""
Web App Front End

The front end holds no shared resources. Its health is the server itself
plus process figures; page rendering lives elsewhere.

Usage:
    uvicorn services.web_app:create_app --factory
"""

from typing import Optional

from fastapi import FastAPI

from core.config import Settings, get_settings
from health import CallableProbe, Criticality, ServiceRuntime
from health.checks import ProcessProbe
from services.app import create_service_app, runtime_from_settings

SERVICE_NAME = "web-app"


def _server_ready() -> dict:
    return {"ready": True}


def build_runtime(settings: Settings) -> ServiceRuntime:
    runtime = runtime_from_settings(settings)
    runtime.register_probe(
        CallableProbe("server", _server_ready, Criticality.CRITICAL, timeout_seconds=1.0)
    )
    runtime.register_probe(ProcessProbe(runtime="python"))
    return runtime


def create_app(settings: Optional[Settings] = None, **kwargs) -> FastAPI:
    settings = settings or get_settings(SERVICE_NAME)
    return create_service_app(build_runtime(settings), title="Web App", **kwargs)
