# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - Dependency clients
# PURPOSE: Database, cache, chain RPC, exchange and Telegram clients
# CREATED: 18 OCT 2026
# ============================================================================
"""
Infrastructure module for the platform services.

Each client exposes a bounded check call (used by a probe) and a close()
that is safe to call more than once (used by the shutdown sequence).

Provides:
- DatabasePool: psycopg_pool PostgreSQL pool
- CacheClient: redis.asyncio client
- EthereumRpcClient / SolanaRpcClient: JSON-RPC over httpx
- ExchangeConnector: exchange connection descriptors
- TelegramClient: Bot API over httpx
"""

from infrastructure.database import DatabasePool
from infrastructure.cache import CacheClient
from infrastructure.rpc import EthereumRpcClient, SolanaRpcClient, RpcError
from infrastructure.exchanges import ExchangeConnector, build_connectors
from infrastructure.telegram import TelegramClient, TelegramApiError

__all__ = [
    "DatabasePool",
    "CacheClient",
    "EthereumRpcClient",
    "SolanaRpcClient",
    "RpcError",
    "ExchangeConnector",
    "build_connectors",
    "TelegramClient",
    "TelegramApiError",
]
