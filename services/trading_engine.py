# ============================================================================
# TRADING ENGINE API GATEWAY
# ============================================================================
# STATUS: Service - API gateway wiring
# PURPOSE: Probes, startup steps and close order for the trading engine
# CREATED: 18 OCT 2026
# ============================================================================
"""
Trading Engine API Gateway

Dependencies:
    database   (critical)       PostgreSQL pool
    redis      (critical)       market data cache
    ethereum   (critical)       EVM JSON-RPC
    solana     (critical)       Solana JSON-RPC
    exchanges  (informational)  connector mode, "demo-mode" when unkeyed
    process    (informational)  memory / uptime

Startup: connect Redis, open the pool; the chain endpoints are verified
by the critical probe pass that follows the startup steps.
Shutdown: database pool, Redis, then the RPC transports.

Usage:
    uvicorn services.trading_engine:create_app --factory
"""

from typing import Optional

from fastapi import FastAPI

from core.config import Settings, get_settings
from health import ServiceRuntime
from health.checks import (
    EthereumProbe,
    ExchangeProbe,
    PostgresProbe,
    ProcessProbe,
    RedisProbe,
    SolanaProbe,
)
from infrastructure import (
    CacheClient,
    DatabasePool,
    EthereumRpcClient,
    SolanaRpcClient,
    build_connectors,
)
from services.app import create_service_app, runtime_from_settings

SERVICE_NAME = "trading-engine"


def build_runtime(settings: Settings) -> ServiceRuntime:
    """Declare the trading engine's dependencies on a fresh runtime."""
    runtime = runtime_from_settings(settings)
    chain = settings.blockchain

    pool = DatabasePool(settings.database)
    cache = CacheClient(settings.cache)
    ethereum = EthereumRpcClient(chain.ethereum_rpc_url, timeout_seconds=chain.request_timeout_seconds)
    solana = SolanaRpcClient(chain.solana_rpc_url, timeout_seconds=chain.request_timeout_seconds)

    runtime.register_probe(PostgresProbe(pool))
    runtime.register_probe(RedisProbe(cache))
    runtime.register_probe(EthereumProbe(ethereum))
    runtime.register_probe(SolanaProbe(solana))
    runtime.register_probe(ExchangeProbe(build_connectors(settings.exchanges)))
    runtime.register_probe(ProcessProbe())

    runtime.add_startup_step("redis", cache.connect)
    runtime.add_startup_step("database", pool.open)

    runtime.add_resource("database", pool.close)
    runtime.add_resource("redis", cache.close)
    runtime.add_resource("ethereum", ethereum.close)
    runtime.add_resource("solana", solana.close)

    return runtime


def create_app(settings: Optional[Settings] = None, **kwargs) -> FastAPI:
    settings = settings or get_settings(SERVICE_NAME)
    return create_service_app(build_runtime(settings), title="Trading Engine", **kwargs)
