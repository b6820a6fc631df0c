# ============================================================================
# REDIS CACHE CLIENT
# ============================================================================
# STATUS: Infrastructure - Redis connection management
# PURPOSE: Shared cache client with connect/ping/close
# CREATED: 18 OCT 2026
# ============================================================================
"""
Redis Cache Client

Thin wrapper over redis.asyncio with the timeouts from CacheSettings.
The client is created lazily in connect() so constructing it never
touches the network.
"""

import logging
from typing import Any, Dict, Optional

import redis.asyncio as redis

from core.config import CacheSettings

logger = logging.getLogger(__name__)


class CacheClient:
    """Async Redis client with an idempotent close."""

    def __init__(self, settings: CacheSettings):
        self.settings = settings
        self._client: Optional[redis.Redis] = None
        self._closed = False

    @property
    def is_connected(self) -> bool:
        return self._client is not None and not self._closed

    async def connect(self) -> None:
        """Create the client and verify it answers PING."""
        if not self.settings.url:
            raise RuntimeError("Redis not configured, set REDIS_URL")
        if self._client is not None:
            return

        self._client = redis.from_url(
            self.settings.url,
            db=self.settings.db,
            socket_connect_timeout=self.settings.connect_timeout_seconds,
            socket_timeout=self.settings.command_timeout_seconds,
            decode_responses=True,
        )
        await self._client.ping()
        logger.info("Connected to Redis")

    async def ping(self) -> bool:
        """PING the server. Raises if not connected or the call fails."""
        if not self.is_connected:
            raise RuntimeError("Redis client not connected")
        return bool(await self._client.ping())

    async def info_memory(self) -> Dict[str, Any]:
        """Selected INFO memory figures."""
        if not self.is_connected:
            return {}
        info = await self._client.info("memory")
        return {
            "used_memory_human": info.get("used_memory_human"),
            "maxmemory_human": info.get("maxmemory_human"),
        }

    async def close(self) -> None:
        """Close the connection pool. Safe to call more than once."""
        if self._closed or self._client is None:
            self._closed = True
            return

        self._closed = True
        await self._client.aclose()
        logger.info("Redis connection closed")


__all__ = [
    "CacheClient",
]
