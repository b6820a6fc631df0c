# ============================================================================
# SERVICE WIRING TESTS
# ============================================================================
# STATUS: Tests - Per-service probes, startup steps and close order
# PURPOSE: Verify each service declares its dependencies as deployed
# CREATED: 18 OCT 2026
# ============================================================================
"""
Tests for the three service modules and the process entry point.

build_runtime() never touches the network, so the wiring can be checked
without PostgreSQL, Redis or chain endpoints.

Run with:
    pytest tests/test_services.py -v
"""

import asyncio
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

import main
from core.config import ServiceSettings, Settings, TelegramSettings
from health import Criticality, LifecyclePhase, StartupError
from services import SERVICE_MODULES, telegram_bot, trading_engine, web_app
from services.runner import serve


def _settings(name, **sections) -> Settings:
    return Settings(service=ServiceSettings(service_name=name), **sections)


def _criticality(runtime):
    return {p.name: p.criticality for p in runtime.registry.list()}


class TestTradingEngine:

    def test_probes(self):
        runtime = trading_engine.build_runtime(_settings("trading-engine"))

        assert runtime.registry.names() == (
            "database", "redis", "ethereum", "solana", "exchanges", "process",
        )
        crit = _criticality(runtime)
        assert crit["database"] == Criticality.CRITICAL
        assert crit["ethereum"] == Criticality.CRITICAL
        assert crit["solana"] == Criticality.CRITICAL
        assert crit["exchanges"] == Criticality.INFORMATIONAL
        assert crit["process"] == Criticality.INFORMATIONAL

    def test_close_order(self):
        runtime = trading_engine.build_runtime(_settings("trading-engine"))
        assert [r.name for r in runtime.shutdown.resources] == [
            "database", "redis", "ethereum", "solana",
        ]

    def test_service_name(self):
        runtime = trading_engine.build_runtime(_settings("trading-engine"))
        assert runtime.service_name == "trading-engine"


class TestTelegramBot:

    def test_probes_and_close_order(self):
        runtime = telegram_bot.build_runtime(_settings("telegram-bot"))

        assert runtime.registry.names() == ("database", "redis", "telegram", "process")
        assert _criticality(runtime)["telegram"] == Criticality.INFORMATIONAL
        assert [r.name for r in runtime.shutdown.resources] == ["database", "redis", "telegram"]

    def test_webhook_step_only_when_configured(self):
        plain = telegram_bot.build_runtime(_settings("telegram-bot"))
        hooked = telegram_bot.build_runtime(_settings(
            "telegram-bot",
            telegram=TelegramSettings(bot_token="t", webhook_url="https://bot.example.com/hook"),
        ))

        assert [s.name for s in plain._startup_steps] == ["redis", "database"]
        assert [s.name for s in hooked._startup_steps] == ["redis", "database", "telegram_webhook"]

    def test_startup_without_redis_fails(self):
        app = telegram_bot.create_app(_settings("telegram-bot"), install_signal_handlers=False)
        runtime = app.state.runtime

        with pytest.raises(StartupError, match="REDIS_URL"):
            with TestClient(app):
                pass

        assert runtime.lifecycle.phase == LifecyclePhase.STARTING


class TestWebApp:

    def test_serves_health(self):
        app = web_app.create_app(_settings("web-app"), install_signal_handlers=False)

        with TestClient(app) as client:
            health = client.get("/health")
            ready = client.get("/ready")

        assert health.status_code == 200
        body = health.json()
        assert body["service"] == "web-app"
        assert body["checks"]["server"]["status"] == "healthy"
        assert body["checks"]["process"]["detail"]["runtime"] == "python"
        assert ready.status_code == 200


class TestEntryPoint:

    def test_service_modules(self):
        assert set(SERVICE_MODULES) == {"telegram-bot", "trading-engine", "web-app"}

    def test_main_requires_service(self, monkeypatch):
        monkeypatch.delenv("SERVICE_NAME", raising=False)
        assert main.main([]) == 2

    def test_main_runs_service(self, monkeypatch):
        monkeypatch.delenv("HOST", raising=False)
        monkeypatch.setenv("PORT", "9000")
        with patch("main.run_service", return_value=0) as run:
            assert main.main(["web-app"]) == 0

        app, settings = run.call_args.args
        assert settings.service_name == "web-app"
        assert settings.port == 9000
        assert app.state.runtime.service_name == "web-app"

    def test_serve_reports_startup_failure(self):
        app = MagicMock()
        app.state.runtime.lifecycle.phase = LifecyclePhase.STARTING

        server = MagicMock()

        async def fake_serve():
            return None

        server.serve = fake_serve
        with patch("services.runner.uvicorn.Server", return_value=server):
            code = asyncio.run(serve(app, ServiceSettings(service_name="web-app")))

        assert code == 1

    def test_serve_stops_server_after_drain(self):
        app = web_app.create_app(_settings("web-app"), install_signal_handlers=False)
        runtime = app.state.runtime
        runtime.lifecycle.mark_serving()

        server = MagicMock()
        server.should_exit = False

        async def fake_serve():
            await runtime.shutdown.drain_and_stop()
            assert server.should_exit
            # uvicorn runs the lifespan exit once in-flight requests are done
            await runtime.shutdown.shutdown()

        server.serve = fake_serve
        with patch("services.runner.uvicorn.Server", return_value=server):
            code = asyncio.run(serve(app, ServiceSettings(service_name="web-app")))

        assert code == 0
        assert runtime.lifecycle.phase == LifecyclePhase.STOPPED
