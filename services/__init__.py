# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Core - Service definitions
# PURPOSE: Per-service dependency wiring on top of the health core
# CREATED: 18 OCT 2026
# ============================================================================
"""
Services Module

Each service module exposes build_runtime(settings) and create_app().

    telegram-bot    services.telegram_bot
    trading-engine  services.trading_engine
    web-app         services.web_app
"""

SERVICE_MODULES = {
    "telegram-bot": "services.telegram_bot",
    "trading-engine": "services.trading_engine",
    "web-app": "services.web_app",
}

__all__ = [
    "SERVICE_MODULES",
]
