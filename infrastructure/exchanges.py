# ============================================================================
# EXCHANGE CONNECTORS
# ============================================================================
# STATUS: Infrastructure - Exchange connector descriptors
# PURPOSE: Track which exchanges are wired and whether they run in demo mode
# CREATED: 18 OCT 2026
# ============================================================================
"""
Exchange Connectors

Trading against exchanges is out of scope; the engine only needs to know
which connectors exist and whether they are live or in demo mode, so the
health report can say so.
"""

from dataclasses import dataclass
from typing import List

from core.config import ExchangeSettings

DEMO_KEY = "demo"


@dataclass(frozen=True)
class ExchangeConnector:
    """A configured exchange connection."""
    name: str
    api_key: str = DEMO_KEY
    sandbox: bool = True

    @property
    def demo_mode(self) -> bool:
        return self.api_key == DEMO_KEY or not self.api_key

    @property
    def mode(self) -> str:
        if self.demo_mode:
            return "demo-mode"
        return "sandbox" if self.sandbox else "live"


def build_connectors(settings: ExchangeSettings) -> List[ExchangeConnector]:
    """Connectors the trading engine is configured with."""
    return [
        ExchangeConnector("binance", settings.binance_api_key, settings.sandbox),
        ExchangeConnector("coinbase", settings.coinbase_api_key, settings.sandbox),
    ]


__all__ = [
    "ExchangeConnector",
    "build_connectors",
]
