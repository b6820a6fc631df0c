# ============================================================================
# CONFIGURATION AND LOGGING TESTS
# ============================================================================
# STATUS: Tests - Environment settings and structured logging
# PURPOSE: Verify env overrides and context propagation into log records
# CREATED: 18 OCT 2026
# ============================================================================
"""
Tests for core.config and core.logging.

Run with:
    pytest tests/test_config_logging.py -v
"""

import json
import logging

from core.config import (
    BlockchainSettings,
    DatabaseSettings,
    ExchangeSettings,
    ServiceSettings,
    get_settings,
)
from core.logging import (
    HumanFormatter,
    StructuredFormatter,
    get_current_context,
    get_logger,
    log_context,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "NODE_ENV", "ENVIRONMENT", "HEALTH_DEADLINE_SECONDS"):
            monkeypatch.delenv(name, raising=False)

        svc = ServiceSettings.from_env("trading-engine")

        assert svc.service_name == "trading-engine"
        assert svc.port == 8080
        assert svc.environment == "development"
        assert svc.health_deadline_seconds == 5.0
        assert svc.readiness_deadline_seconds == 2.0
        assert not svc.is_production

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "3001")
        monkeypatch.setenv("NODE_ENV", "production")
        monkeypatch.setenv("SHUTDOWN_DRAIN_SECONDS", "3")

        svc = ServiceSettings.from_env("telegram-bot")

        assert svc.port == 3001
        assert svc.is_production
        assert svc.shutdown_drain_seconds == 3.0

    def test_database_timeout_in_milliseconds(self, monkeypatch):
        monkeypatch.setenv("DB_CONNECTION_TIMEOUT", "1500")
        monkeypatch.setenv("NODE_ENV", "production")

        db = DatabaseSettings.from_env()

        assert db.connect_timeout_seconds == 1.5
        assert db.require_ssl

    def test_chain_defaults(self, monkeypatch):
        monkeypatch.delenv("SOLANA_RPC_URL", raising=False)
        assert BlockchainSettings.from_env().solana_rpc_url == "https://api.mainnet-beta.solana.com"

    def test_exchanges_default_to_demo(self, monkeypatch):
        monkeypatch.delenv("BINANCE_API_KEY", raising=False)
        assert ExchangeSettings.from_env().binance_api_key == "demo"

    def test_get_settings_sections(self, monkeypatch):
        monkeypatch.setenv("REDIS_URL", "redis://cache:6379")
        settings = get_settings("web-app")
        assert settings.service.service_name == "web-app"
        assert settings.cache.url == "redis://cache:6379"


# ============================================================================
# LOGGING
# ============================================================================

def _record(msg="hello", **extra):
    record = logging.LogRecord("test", logging.INFO, __file__, 1, msg, None, None)
    if extra:
        record.extra = extra
    return record


class TestLogContext:

    def test_nested_contexts_restore(self):
        assert get_current_context().service is None

        with log_context(service="trading-engine"):
            with log_context(resource="redis", attempt=2):
                ctx = get_current_context()
                assert ctx.service == "trading-engine"
                assert ctx.resource == "redis"
                assert ctx.extra == {"attempt": 2}
            assert get_current_context().resource is None

        assert get_current_context().service is None

    def test_structured_formatter_includes_context(self):
        formatter = StructuredFormatter(include_source=False)
        with log_context(service="web-app", phase="draining"):
            data = json.loads(formatter.format(_record(duration_ms=1.5)))

        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["context"] == {"service": "web-app", "phase": "draining"}
        assert data["data"] == {"duration_ms": 1.5}
        assert "source" not in data

    def test_human_formatter(self):
        with log_context(service="telegram-bot", probe="redis"):
            line = HumanFormatter().format(_record("Probe failed"))
        assert "service=telegram-bot" in line
        assert "probe=redis" in line
        assert line.endswith("Probe failed")

    def test_context_logger_moves_extra(self):
        logger = get_logger("tests.logging")
        msg, kwargs = logger.process("msg", {"extra": {"duration_ms": 3}})
        assert kwargs["extra"] == {"extra": {"duration_ms": 3}}
