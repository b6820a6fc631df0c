# ============================================================================
# EXCHANGE PROBE
# ============================================================================
# STATUS: Health - Exchange connector status
# PURPOSE: Surface demo/live mode of each configured exchange
# CREATED: 18 OCT 2026
# ============================================================================
"""
Exchange Probe

Informational. Demo-mode connectors are reported as degraded with a
"demo-mode" marker so dashboards show the engine is not trading live.
"""

from typing import Sequence

from health.core import Criticality, Probe, ProbeOutcome
from infrastructure.exchanges import ExchangeConnector


class ExchangeProbe(Probe):
    """Reports the mode of every exchange connector."""

    name = "exchanges"
    criticality = Criticality.INFORMATIONAL
    timeout_seconds = 1.0

    def __init__(self, connectors: Sequence[ExchangeConnector]):
        self.connectors = tuple(connectors)

    async def check(self) -> ProbeOutcome:
        modes = {c.name: c.mode for c in self.connectors}
        demo = [c.name for c in self.connectors if c.demo_mode]

        if demo:
            return ProbeOutcome.degraded(
                f"Demo mode: {', '.join(demo)}",
                **modes,
            )
        return ProbeOutcome.healthy(**modes)


__all__ = [
    "ExchangeProbe",
]
