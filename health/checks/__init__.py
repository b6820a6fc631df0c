# ============================================================================
# DEPENDENCY PROBES
# ============================================================================
# STATUS: Health - Probe implementations
# PURPOSE: Concrete probes for the platform's external dependencies
# CREATED: 18 OCT 2026
# ============================================================================
"""
Dependency Probes

Critical (gate readiness):
- database: PostgreSQL SELECT 1
- redis: Redis PING
- ethereum / solana: chain RPC height > 0

Informational (health detail only):
- process: pid, uptime, memory
- exchanges: exchange connector mode (demo-mode marker)
- telegram: Bot API getMe

Probes are plain classes; services instantiate them with their clients
and register them on their ServiceRuntime.
"""

from health.checks.process import ProcessProbe
from health.checks.database import PostgresProbe
from health.checks.cache import RedisProbe
from health.checks.blockchain import EthereumProbe, SolanaProbe
from health.checks.exchanges import ExchangeProbe
from health.checks.telegram import TelegramProbe

__all__ = [
    "ProcessProbe",
    "PostgresProbe",
    "RedisProbe",
    "EthereumProbe",
    "SolanaProbe",
    "ExchangeProbe",
    "TelegramProbe",
]
