# ============================================================================
# DATABASE PROBE
# ============================================================================
# STATUS: Health - PostgreSQL connectivity
# PURPOSE: SELECT 1 through the shared pool, with pool stats
# CREATED: 18 OCT 2026
# ============================================================================
"""
Database Probe

Runs SELECT 1 through the service's DatabasePool. Pool statistics from
psycopg_pool ride along in the detail:
- pool_size / pool_available: current connections and idle ones
- pool_min / pool_max: configured bounds
- requests_waiting: requests blocked waiting for a connection
- requests_errors / connections_lost: lifetime failure counters

A saturated pool is flagged in the detail but does not fail the probe;
the ping either gets a connection within the timeout or it does not.
"""

from health.core import Criticality, Probe, ProbeOutcome
from infrastructure.database import DatabasePool

STAT_KEYS = (
    "pool_size",
    "pool_available",
    "pool_min",
    "pool_max",
    "requests_waiting",
    "requests_num",
    "requests_errors",
    "connections_num",
    "connections_lost",
)


class PostgresProbe(Probe):
    """PostgreSQL connectivity probe."""

    name = "database"
    criticality = Criticality.CRITICAL
    timeout_seconds = 2.0

    def __init__(self, pool: DatabasePool, name: str = None):
        self.pool = pool
        if name:
            self.name = name

    async def check(self) -> ProbeOutcome:
        if not self.pool.is_open:
            return ProbeOutcome.unhealthy("Connection pool not initialized")

        if not await self.pool.ping():
            return ProbeOutcome.unhealthy("PostgreSQL query returned unexpected result")

        stats = self.pool.stats()
        details = {key: stats.get(key, 0) for key in STAT_KEYS}
        details["saturated"] = details["requests_waiting"] > 0

        return ProbeOutcome.healthy(
            message=f"PostgreSQL connected ({details['pool_available']}/"
                    f"{details['pool_size']} available)",
            **details,
        )


__all__ = [
    "PostgresProbe",
]
