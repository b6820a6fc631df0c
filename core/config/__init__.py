# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the platform services.
"""

from core.config.defaults import (
    ServiceSettings,
    DatabaseSettings,
    CacheSettings,
    BlockchainSettings,
    ExchangeSettings,
    TelegramSettings,
    Settings,
    get_settings,
)

__all__ = [
    "ServiceSettings",
    "DatabaseSettings",
    "CacheSettings",
    "BlockchainSettings",
    "ExchangeSettings",
    "TelegramSettings",
    "Settings",
    "get_settings",
]
