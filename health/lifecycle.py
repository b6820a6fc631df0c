# ============================================================================
# LIFECYCLE STATE
# ============================================================================
# STATUS: Core - Process lifecycle phase
# PURPOSE: Governs readiness and liveness independently of probe results
# CREATED: 18 OCT 2026
# ============================================================================
"""
Lifecycle State

Process-wide phase with a one-way transition order:

    STARTING -> SERVING -> DRAINING -> STOPPED

| Phase    | ready | alive | health            |
|----------|-------|-------|-------------------|
| STARTING | no    | yes   | live probe result |
| SERVING  | probe | yes   | live probe result |
| DRAINING | no    | yes   | live probe result |
| STOPPED  | no    | no    | not served        |

The startup routine owns STARTING -> SERVING; the shutdown coordinator
owns DRAINING and STOPPED. Readers only look at `phase` and never block.
"""

import logging
import threading
import time
from enum import Enum
from typing import Dict, Optional

from health.errors import LifecycleTransitionError

logger = logging.getLogger(__name__)


class LifecyclePhase(str, Enum):
    """Process lifecycle phases, in transition order."""
    STARTING = "starting"
    SERVING = "serving"
    DRAINING = "draining"
    STOPPED = "stopped"

    @property
    def next_phase(self) -> Optional["LifecyclePhase"]:
        """The only phase this one may move to (None when terminal)."""
        return _NEXT_PHASE[self]


_NEXT_PHASE: Dict[LifecyclePhase, Optional[LifecyclePhase]] = {
    LifecyclePhase.STARTING: LifecyclePhase.SERVING,
    LifecyclePhase.SERVING: LifecyclePhase.DRAINING,
    LifecyclePhase.DRAINING: LifecyclePhase.STOPPED,
    LifecyclePhase.STOPPED: None,
}


class LifecycleState:
    """
    Single-writer, multi-reader holder of the current phase.

    Each phase may be entered once, and only from its predecessor.
    """

    def __init__(self):
        self._phase = LifecyclePhase.STARTING
        self._entered_at: Dict[LifecyclePhase, float] = {
            LifecyclePhase.STARTING: time.time(),
        }
        self._write_lock = threading.Lock()

    @property
    def phase(self) -> LifecyclePhase:
        return self._phase

    @property
    def is_ready(self) -> bool:
        """Whether the phase allows readiness (probes still decide)."""
        return self._phase == LifecyclePhase.SERVING

    @property
    def is_alive(self) -> bool:
        return self._phase != LifecyclePhase.STOPPED

    def entered_at(self, phase: LifecyclePhase) -> Optional[float]:
        """Epoch seconds when the phase was entered, None if not yet."""
        return self._entered_at.get(phase)

    def mark_serving(self) -> None:
        """STARTING -> SERVING. Called once by the startup routine."""
        self._advance(LifecyclePhase.SERVING)

    def begin_draining(self) -> None:
        """SERVING -> DRAINING. Called once by the shutdown coordinator."""
        self._advance(LifecyclePhase.DRAINING)

    def mark_stopped(self) -> None:
        """DRAINING -> STOPPED. Called once by the shutdown coordinator."""
        self._advance(LifecyclePhase.STOPPED)

    def _advance(self, target: LifecyclePhase) -> None:
        with self._write_lock:
            current = self._phase
            if current.next_phase != target:
                raise LifecycleTransitionError(current.value, target.value)
            self._entered_at[target] = time.time()
            self._phase = target

        logger.info(f"Lifecycle phase: {current.value} -> {target.value}")

    def to_dict(self) -> Dict[str, object]:
        return {
            "phase": self._phase.value,
            "ready": self.is_ready,
            "alive": self.is_alive,
        }


__all__ = [
    "LifecyclePhase",
    "LifecycleState",
]
