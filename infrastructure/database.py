# ============================================================================
# DATABASE CONNECTION POOL
# ============================================================================
# STATUS: Infrastructure - Async PostgreSQL connection management
# PURPOSE: Connection pool the services share, with a health ping
# CREATED: 18 OCT 2026
# ============================================================================
"""
Database Connection Pool

Manages async PostgreSQL connections using psycopg3 and psycopg_pool.
One pool per service process.

Connection string priority:
1. DatabaseSettings.url (DATABASE_URL)
2. Individual POSTGRES_* components

Usage:
    pool = DatabasePool(settings.database)
    await pool.open()
    await pool.ping()
    await pool.close()
"""

import logging
import os
from typing import Any, Dict, Optional

from psycopg_pool import AsyncConnectionPool

from core.config import DatabaseSettings

logger = logging.getLogger(__name__)


def get_connection_string(settings: DatabaseSettings) -> str:
    """
    Get database connection string.

    Returns:
        PostgreSQL connection string
    """
    if settings.url:
        return settings.url

    host = os.environ.get("POSTGRES_HOST", "localhost")
    port = os.environ.get("POSTGRES_PORT", "5432")
    name = os.environ.get("POSTGRES_DB", "postgres")
    user = os.environ.get("POSTGRES_USER", "postgres")
    password = os.environ.get("POSTGRES_PASSWORD", "")
    sslmode = "require" if settings.require_ssl else "prefer"

    return f"postgresql://{user}:{password}@{host}:{port}/{name}?sslmode={sslmode}"


def mask_conninfo(conninfo: str) -> str:
    """Drop credentials from a connection string for logging."""
    if "@" in conninfo:
        return conninfo.split("@")[-1]
    if "password=" in conninfo:
        return conninfo.split("password=")[0] + "password=***"
    return conninfo


class DatabasePool:
    """
    Async PostgreSQL pool with open/ping/close.

    close() is idempotent so the shutdown sequence and a failed startup can
    both call it.
    """

    def __init__(
        self,
        settings: DatabaseSettings,
        connection_string: Optional[str] = None,
    ):
        self.settings = settings
        self._conninfo = connection_string or get_connection_string(settings)
        self._pool: Optional[AsyncConnectionPool] = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._pool is not None and not self._closed

    async def open(self) -> None:
        """Create and open the pool; waits for min_size connections."""
        if self._pool is not None:
            logger.warning("Pool already initialized")
            return

        logger.info(f"Initializing connection pool: {mask_conninfo(self._conninfo)}")

        self._pool = AsyncConnectionPool(
            conninfo=self._conninfo,
            min_size=self.settings.pool_min,
            max_size=self.settings.pool_max,
            timeout=self.settings.connect_timeout_seconds,
            kwargs={"connect_timeout": max(1, int(self.settings.connect_timeout_seconds))},
            open=False,
        )
        await self._pool.open(wait=True, timeout=self.settings.connect_timeout_seconds)
        logger.info(
            f"Connection pool opened (min={self.settings.pool_min}, max={self.settings.pool_max})"
        )

    async def ping(self) -> bool:
        """Run SELECT 1. Raises if the pool is closed or the query fails."""
        if not self.is_open:
            raise RuntimeError("Connection pool not initialized")

        async with self._pool.connection() as conn:
            cursor = await conn.execute("SELECT 1")
            row = await cursor.fetchone()
        return bool(row) and row[0] == 1

    def stats(self) -> Dict[str, Any]:
        """psycopg_pool statistics (empty when not open)."""
        if not self.is_open:
            return {}
        return self._pool.get_stats()

    async def close(self) -> None:
        """Close the pool. Safe to call more than once."""
        if self._closed or self._pool is None:
            self._closed = True
            return

        self._closed = True
        await self._pool.close()
        logger.info("Connection pool closed")


__all__ = [
    "DatabasePool",
    "get_connection_string",
    "mask_conninfo",
]
