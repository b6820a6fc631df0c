# ============================================================================
# BLOCKCHAIN RPC CLIENTS
# ============================================================================
# STATUS: Infrastructure - JSON-RPC transport for chain endpoints
# PURPOSE: Minimal Ethereum / Solana RPC calls used for health probing
# CREATED: 18 OCT 2026
# ============================================================================
"""
Blockchain RPC Clients

Async JSON-RPC 2.0 over httpx. Only the calls the health probes need are
implemented:
- Ethereum: eth_blockNumber
- Solana: getSlot (commitment "confirmed")
"""

import itertools
import logging
from typing import Any, List, Optional

import httpx

logger = logging.getLogger(__name__)


class RpcError(Exception):
    """JSON-RPC call returned an error object or an unusable response."""

    def __init__(self, message: str, code: Optional[int] = None, method: str = None):
        self.code = code
        self.method = method
        super().__init__(message)


class JsonRpcClient:
    """Async JSON-RPC 2.0 client over one pooled httpx.AsyncClient."""

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self._client = httpx.AsyncClient(timeout=timeout_seconds, transport=transport)
        self._ids = itertools.count(1)
        self._closed = False

    async def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Make a JSON-RPC call.

        Raises:
            RpcError: Response carried an error or no result
            httpx.HTTPError: Transport failure or non-2xx status
        """
        if self._closed:
            raise RpcError("RPC client closed", method=method)

        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }
        resp = await self._client.post(self.url, json=payload)
        resp.raise_for_status()
        body = resp.json()

        if body.get("error"):
            error = body["error"]
            raise RpcError(
                f"{method} failed: {error.get('message', error)}",
                code=error.get("code"),
                method=method,
            )
        if "result" not in body:
            raise RpcError(f"{method} returned no result", method=method)
        return body["result"]

    async def close(self) -> None:
        """Close the HTTP transport. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()
        logger.info(f"RPC client closed: {type(self).__name__}")


class EthereumRpcClient(JsonRpcClient):
    """Ethereum JSON-RPC endpoint."""

    chain = "ethereum"

    async def get_block_number(self) -> int:
        result = await self.call("eth_blockNumber")
        return int(result, 16)


class SolanaRpcClient(JsonRpcClient):
    """Solana JSON-RPC endpoint."""

    chain = "solana"

    def __init__(self, url: str, commitment: str = "confirmed", **kwargs):
        super().__init__(url, **kwargs)
        self.commitment = commitment

    async def get_slot(self) -> int:
        result = await self.call("getSlot", [{"commitment": self.commitment}])
        return int(result)


__all__ = [
    "RpcError",
    "JsonRpcClient",
    "EthereumRpcClient",
    "SolanaRpcClient",
]
