# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for services, health deadlines, dependencies
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Sensible defaults for every service, overridable via environment
variables. Variable names match the ones the services were deployed with
(DATABASE_URL, REDIS_URL, ETHEREUM_RPC_URL, ...).

Design:
- Immutable dataclasses for defaults
- Environment variable overrides via from_env()
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, default))


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, default))


def _ms_to_seconds(name: str, default_ms: int) -> float:
    return _env_int(name, default_ms) / 1000.0


@dataclass(frozen=True)
class ServiceSettings:
    """
    Process-level settings shared by all services.

    Controls HTTP binding and the health/shutdown timings.
    """
    service_name: str = "crypto-platform"
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 8080

    # Batch deadlines (seconds)
    health_deadline_seconds: float = 5.0
    readiness_deadline_seconds: float = 2.0
    startup_deadline_seconds: float = 10.0

    # Shutdown
    shutdown_drain_seconds: float = 0.0
    shutdown_close_timeout_seconds: float = 10.0

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls, service_name: Optional[str] = None) -> "ServiceSettings":
        """Create from environment variables."""
        return cls(
            service_name=service_name or os.getenv("SERVICE_NAME", "crypto-platform"),
            environment=os.getenv("NODE_ENV", os.getenv("ENVIRONMENT", "development")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_env_int("PORT", 8080),
            health_deadline_seconds=_env_float("HEALTH_DEADLINE_SECONDS", 5.0),
            readiness_deadline_seconds=_env_float("READINESS_DEADLINE_SECONDS", 2.0),
            startup_deadline_seconds=_env_float("STARTUP_DEADLINE_SECONDS", 10.0),
            shutdown_drain_seconds=_env_float("SHUTDOWN_DRAIN_SECONDS", 0.0),
            shutdown_close_timeout_seconds=_env_float("SHUTDOWN_CLOSE_TIMEOUT_SECONDS", 10.0),
        )


@dataclass(frozen=True)
class DatabaseSettings:
    """
    PostgreSQL connection pool settings.

    ssl is required in production, matching the deployed services.
    """
    url: Optional[str] = None
    pool_min: int = 5
    pool_max: int = 20
    connect_timeout_seconds: float = 2.0
    require_ssl: bool = False

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """Create from environment variables."""
        return cls(
            url=os.getenv("DATABASE_URL"),
            pool_min=_env_int("DB_POOL_MIN", 5),
            pool_max=_env_int("DB_POOL_MAX", 20),
            connect_timeout_seconds=_ms_to_seconds("DB_CONNECTION_TIMEOUT", 2000),
            require_ssl=os.getenv("NODE_ENV", "") == "production",
        )


@dataclass(frozen=True)
class CacheSettings:
    """Redis client settings."""
    url: Optional[str] = None
    db: int = 0
    connect_timeout_seconds: float = 5.0
    command_timeout_seconds: float = 5.0

    @classmethod
    def from_env(cls) -> "CacheSettings":
        """Create from environment variables."""
        return cls(
            url=os.getenv("REDIS_URL"),
            db=_env_int("REDIS_DB", 0),
            connect_timeout_seconds=_ms_to_seconds("REDIS_CONNECT_TIMEOUT", 5000),
            command_timeout_seconds=_ms_to_seconds("REDIS_COMMAND_TIMEOUT", 5000),
        )


@dataclass(frozen=True)
class BlockchainSettings:
    """JSON-RPC endpoints for the chains the trading engine watches."""
    ethereum_rpc_url: str = "https://eth-mainnet.alchemyapi.io/v2/demo"
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    request_timeout_seconds: float = 5.0

    @classmethod
    def from_env(cls) -> "BlockchainSettings":
        """Create from environment variables."""
        return cls(
            ethereum_rpc_url=os.getenv("ETHEREUM_RPC_URL", cls.ethereum_rpc_url),
            solana_rpc_url=os.getenv("SOLANA_RPC_URL", cls.solana_rpc_url),
            request_timeout_seconds=_env_float("RPC_REQUEST_TIMEOUT_SECONDS", 5.0),
        )


@dataclass(frozen=True)
class ExchangeSettings:
    """
    Exchange connector settings.

    Connectors run in demo mode unless real keys are configured.
    """
    binance_api_key: str = "demo"
    coinbase_api_key: str = "demo"
    sandbox: bool = True

    @classmethod
    def from_env(cls) -> "ExchangeSettings":
        """Create from environment variables."""
        return cls(
            binance_api_key=os.getenv("BINANCE_API_KEY", "demo"),
            coinbase_api_key=os.getenv("COINBASE_API_KEY", "demo"),
            sandbox=os.getenv("NODE_ENV", "") != "production",
        )


@dataclass(frozen=True)
class TelegramSettings:
    """Telegram Bot API settings."""
    bot_token: str = ""
    webhook_url: Optional[str] = None
    api_base_url: str = "https://api.telegram.org"

    @classmethod
    def from_env(cls) -> "TelegramSettings":
        """Create from environment variables."""
        return cls(
            bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
            webhook_url=os.getenv("TELEGRAM_WEBHOOK_URL") or None,
        )


@dataclass(frozen=True)
class Settings:
    """Container for all configuration sections."""
    service: ServiceSettings = field(default_factory=ServiceSettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    cache: CacheSettings = field(default_factory=CacheSettings)
    blockchain: BlockchainSettings = field(default_factory=BlockchainSettings)
    exchanges: ExchangeSettings = field(default_factory=ExchangeSettings)
    telegram: TelegramSettings = field(default_factory=TelegramSettings)

    @classmethod
    def from_env(cls, service_name: Optional[str] = None) -> "Settings":
        """Load every section from environment variables."""
        return cls(
            service=ServiceSettings.from_env(service_name),
            database=DatabaseSettings.from_env(),
            cache=CacheSettings.from_env(),
            blockchain=BlockchainSettings.from_env(),
            exchanges=ExchangeSettings.from_env(),
            telegram=TelegramSettings.from_env(),
        )


def get_settings(service_name: Optional[str] = None) -> Settings:
    """Get settings for a service, loaded from the environment."""
    return Settings.from_env(service_name)


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
