# ============================================================================
# BLOCKCHAIN PROBES
# ============================================================================
# STATUS: Health - Chain RPC reachability
# PURPOSE: Latest block / slot from the configured RPC endpoints
# CREATED: 18 OCT 2026
# ============================================================================
"""
Blockchain Probes

- EthereumProbe: eth_blockNumber must be > 0
- SolanaProbe: getSlot must be > 0

A zero height means the endpoint answered but is not synced, which is a
negative answer rather than a failure.
"""

from health.core import Criticality, Probe, ProbeOutcome
from infrastructure.rpc import EthereumRpcClient, SolanaRpcClient


class EthereumProbe(Probe):
    """Ethereum RPC probe."""

    name = "ethereum"
    criticality = Criticality.CRITICAL
    timeout_seconds = 5.0

    def __init__(self, client: EthereumRpcClient):
        self.client = client

    async def check(self) -> ProbeOutcome:
        block_number = await self.client.get_block_number()
        if block_number <= 0:
            return ProbeOutcome.unhealthy("Ethereum RPC not synced", block_number=block_number)
        return ProbeOutcome.healthy(block_number=block_number)


class SolanaProbe(Probe):
    """Solana RPC probe."""

    name = "solana"
    criticality = Criticality.CRITICAL
    timeout_seconds = 5.0

    def __init__(self, client: SolanaRpcClient):
        self.client = client

    async def check(self) -> ProbeOutcome:
        slot = await self.client.get_slot()
        if slot <= 0:
            return ProbeOutcome.unhealthy("Solana RPC not synced", slot=slot)
        return ProbeOutcome.healthy(slot=slot)


__all__ = [
    "EthereumProbe",
    "SolanaProbe",
]
