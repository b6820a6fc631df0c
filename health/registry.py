# ============================================================================
# PROBE REGISTRY
# ============================================================================
# STATUS: Core - Probe registration
# PURPOSE: Ordered, write-once declaration of a service's dependencies
# CREATED: 18 OCT 2026
# ============================================================================
"""
Probe Registry

Holds the probes a service declares at start. Registration order is the
report order. There is no removal: once the service is serving the
registry is sealed and only read.

Usage:
    registry = ProbeRegistry()
    registry.register(PostgresProbe(pool))
    registry.register(RedisProbe(cache))
    registry.seal()

    for probe in registry.list():
        ...
"""

import logging
import threading
from typing import Dict, Optional, Tuple

from health.core import Criticality, Probe
from health.errors import DuplicateProbeNameError, RegistrySealedError

logger = logging.getLogger(__name__)


class ProbeRegistry:
    """
    Registry for dependency probes.

    Writes happen once per probe during startup and are serialized; reads
    take an immutable snapshot and need no lock.
    """

    def __init__(self):
        self._probes: Dict[str, Probe] = {}
        self._ordered: Tuple[Probe, ...] = ()
        self._sealed = False
        self._lock = threading.Lock()

    def register(self, probe: Probe) -> Probe:
        """
        Register a probe instance.

        Args:
            probe: Probe to register

        Returns:
            The registered probe

        Raises:
            DuplicateProbeNameError: If a probe with the same name exists
            RegistrySealedError: If the registry has been sealed
        """
        with self._lock:
            if self._sealed:
                raise RegistrySealedError(probe.name)
            if probe.name in self._probes:
                raise DuplicateProbeNameError(probe.name)

            self._probes[probe.name] = probe
            self._ordered = self._ordered + (probe,)

        logger.debug(
            f"Registered probe: {probe.name} "
            f"(criticality={probe.criticality.value}, timeout={probe.timeout_seconds}s)"
        )
        return probe

    def get(self, name: str) -> Optional[Probe]:
        """Get probe by name."""
        return self._probes.get(name)

    def list(self) -> Tuple[Probe, ...]:
        """All registered probes in registration order."""
        return self._ordered

    def critical(self) -> Tuple[Probe, ...]:
        """Probes that gate readiness, in registration order."""
        return tuple(p for p in self._ordered if p.criticality == Criticality.CRITICAL)

    def names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self._ordered)

    def seal(self) -> None:
        """Freeze the registry. Called when the service starts serving."""
        with self._lock:
            self._sealed = True

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, name: str) -> bool:
        return name in self._probes


__all__ = [
    "ProbeRegistry",
]
