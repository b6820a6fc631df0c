# ============================================================================
# CACHE PROBE
# ============================================================================
# STATUS: Health - Redis connectivity
# PURPOSE: PING the shared Redis client
# CREATED: 18 OCT 2026
# ============================================================================
"""
Cache Probe

PING through the service's CacheClient; memory figures from INFO are
included when available.
"""

from health.core import Criticality, Probe, ProbeOutcome
from infrastructure.cache import CacheClient


class RedisProbe(Probe):
    """Redis connectivity probe."""

    name = "redis"
    criticality = Criticality.CRITICAL
    timeout_seconds = 2.0

    def __init__(self, cache: CacheClient, criticality: Criticality = None):
        self.cache = cache
        if criticality is not None:
            self.criticality = criticality

    async def check(self) -> ProbeOutcome:
        if not self.cache.is_connected:
            return ProbeOutcome.unhealthy("Redis client not connected")

        if not await self.cache.ping():
            return ProbeOutcome.unhealthy("Redis PING did not return PONG")

        return ProbeOutcome.healthy(message="Redis connected", **await self.cache.info_memory())


__all__ = [
    "RedisProbe",
]
