# ============================================================================
# TELEGRAM BOT GATEWAY
# ============================================================================
# STATUS: Service - Bot gateway wiring
# PURPOSE: Probes, startup steps and close order for the bot gateway
# CREATED: 18 OCT 2026
# ============================================================================
"""
Telegram Bot Gateway

Dependencies:
    database  (critical)       PostgreSQL pool
    redis     (critical)       session cache
    telegram  (informational)  Bot API
    process   (informational)  memory / uptime

Startup: connect Redis, open the pool, set the webhook when configured.
Shutdown: database pool, Redis, then the bot transport.

Usage:
    uvicorn services.telegram_bot:create_app --factory
"""

from typing import Optional

from fastapi import FastAPI

from core.config import Settings, get_settings
from health import ServiceRuntime
from health.checks import PostgresProbe, ProcessProbe, RedisProbe, TelegramProbe
from infrastructure import CacheClient, DatabasePool, TelegramClient
from services.app import create_service_app, runtime_from_settings

SERVICE_NAME = "telegram-bot"


def build_runtime(settings: Settings) -> ServiceRuntime:
    """Declare the bot gateway's dependencies on a fresh runtime."""
    runtime = runtime_from_settings(settings)

    pool = DatabasePool(settings.database)
    cache = CacheClient(settings.cache)
    telegram = TelegramClient(settings.telegram)

    runtime.register_probe(PostgresProbe(pool))
    runtime.register_probe(RedisProbe(cache))
    runtime.register_probe(TelegramProbe(telegram))
    runtime.register_probe(ProcessProbe())

    runtime.add_startup_step("redis", cache.connect)
    runtime.add_startup_step("database", pool.open)
    if settings.telegram.webhook_url:
        runtime.add_startup_step("telegram_webhook", telegram.set_webhook)

    runtime.add_resource("database", pool.close)
    runtime.add_resource("redis", cache.close)
    runtime.add_resource("telegram", telegram.close)

    return runtime


def create_app(settings: Optional[Settings] = None, **kwargs) -> FastAPI:
    settings = settings or get_settings(SERVICE_NAME)
    return create_service_app(build_runtime(settings), title="Telegram Bot Gateway", **kwargs)
