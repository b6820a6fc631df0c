# ============================================================================
# TELEGRAM PROBE
# ============================================================================
# STATUS: Health - Bot API reachability
# PURPOSE: getMe against the Telegram Bot API
# CREATED: 18 OCT 2026
# ============================================================================
"""
Telegram Probe

Informational: the HTTP gateway keeps serving webhooks it already
received even if the Bot API is briefly unreachable.
"""

from health.core import Criticality, Probe, ProbeOutcome
from infrastructure.telegram import TelegramClient


class TelegramProbe(Probe):
    """Telegram Bot API probe."""

    name = "telegram"
    criticality = Criticality.INFORMATIONAL
    timeout_seconds = 3.0

    def __init__(self, client: TelegramClient):
        self.client = client

    async def check(self) -> ProbeOutcome:
        me = await self.client.get_me()
        return ProbeOutcome.healthy(
            message="Bot API reachable",
            username=me.get("username"),
            webhook=bool(self.client.settings.webhook_url),
        )


__all__ = [
    "TelegramProbe",
]
