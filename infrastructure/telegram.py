# ============================================================================
# TELEGRAM BOT API CLIENT
# ============================================================================
# STATUS: Infrastructure - Telegram Bot API transport
# PURPOSE: Webhook registration and reachability for the bot gateway
# CREATED: 18 OCT 2026
# ============================================================================
"""
Telegram Bot API Client

Async httpx client for the few Bot API methods the gateway needs:
getMe (health) and setWebhook (startup). Command handling lives outside
this client.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from core.config import TelegramSettings

logger = logging.getLogger(__name__)


class TelegramApiError(Exception):
    """Bot API answered ok=false or an unexpected payload."""

    def __init__(self, method: str, description: str):
        self.method = method
        self.description = description
        super().__init__(f"Telegram {method} failed: {description}")


class TelegramClient:
    """Async Bot API client with an idempotent close."""

    def __init__(
        self,
        settings: TelegramSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout_seconds: float = 5.0,
    ):
        self.settings = settings
        self._client = httpx.AsyncClient(
            base_url=f"{settings.api_base_url.rstrip('/')}/bot{settings.bot_token}",
            timeout=timeout_seconds,
            transport=transport,
        )
        self._closed = False

    async def _call(self, method: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        if self._closed:
            raise TelegramApiError(method, "client closed")

        resp = await self._client.post(f"/{method}", json=payload or {})
        try:
            body = resp.json()
        except ValueError:
            resp.raise_for_status()
            raise TelegramApiError(method, "non-JSON response")

        if not body.get("ok"):
            raise TelegramApiError(method, body.get("description", f"HTTP {resp.status_code}"))
        return body.get("result")

    async def get_me(self) -> Dict[str, Any]:
        """Bot identity; proves the token and the API are reachable."""
        return await self._call("getMe")

    async def set_webhook(self, url: Optional[str] = None) -> bool:
        url = url or self.settings.webhook_url
        if not url:
            raise ValueError("No webhook URL configured, set TELEGRAM_WEBHOOK_URL")
        result = await self._call("setWebhook", {"url": url})
        logger.info("Telegram webhook set")
        return bool(result)

    async def close(self) -> None:
        """Stop the bot transport. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()
        logger.info("Telegram client closed")


__all__ = [
    "TelegramApiError",
    "TelegramClient",
]
