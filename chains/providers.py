"""
chains/providers.py - JSON-RPC provider for one network.

Provides:
- Request timeout handling
- Connection pooling
- Latency tracking

One endpoint per network. Failed calls are raised, never retried.
"""

import time
from dataclasses import dataclass
from typing import Any

import httpx

from core.logging import get_logger
from core.exceptions import RPCError, RPCTimeoutError
from core.constants import DEFAULT_RPC_TIMEOUT_SECONDS

logger = get_logger(__name__)


@dataclass
class RPCStats:
    """Statistics for an RPC endpoint."""
    url: str
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_latency_ms: int = 0
    last_error: str | None = None
    last_success_ts: int | None = None

    @property
    def avg_latency_ms(self) -> int:
        if self.successful_requests == 0:
            return 0
        return self.total_latency_ms // self.successful_requests

    @property
    def success_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.successful_requests / self.total_requests


@dataclass
class RPCResponse:
    """Response from an RPC call."""
    result: Any
    latency_ms: int
    endpoint_used: str


def _hex_to_int(value: str | None) -> int | None:
    if value is None:
        return None
    return int(value, 16)


class RPCProvider:
    """
    Async JSON-RPC provider bound to a single network.

    Tracks statistics for the run report.
    """

    def __init__(
        self,
        name: str,
        rpc_url: str,
        timeout_seconds: int = DEFAULT_RPC_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.name = name
        self.rpc_url = rpc_url
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._request_id = 0
        self.stats = RPCStats(url=rpc_url)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_seconds),
                limits=httpx.Limits(max_connections=10),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _next_request_id(self) -> int:
        """Generate next request ID."""
        self._request_id += 1
        return self._request_id

    async def call(
        self,
        method: str,
        params: list | None = None,
    ) -> RPCResponse:
        """
        Make an RPC call.

        Args:
            method: RPC method name
            params: Method parameters

        Returns:
            RPCResponse with result and metadata

        Raises:
            RPCTimeoutError: If the endpoint does not answer in time
            RPCError: On transport failure or JSON-RPC error object
        """
        client = await self._get_client()
        self.stats.total_requests += 1

        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": self._next_request_id(),
        }
        details = {"network": self.name, "method": method}

        start_ms = int(time.time() * 1000)

        try:
            resp = await client.post(self.rpc_url, json=payload)
            resp.raise_for_status()
            result = resp.json()
        except httpx.TimeoutException as e:
            latency_ms = int(time.time() * 1000) - start_ms
            self._record_failure(f"Timeout after {latency_ms}ms")
            raise RPCTimeoutError(
                f"RPC timeout on {self.name} for {method} after {latency_ms}ms",
                details=details,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            self._record_failure(str(e))
            raise RPCError(
                f"RPC request to {self.name} failed for {method}: {e}",
                details=details,
            ) from e

        latency_ms = int(time.time() * 1000) - start_ms

        if "error" in result:
            error = result["error"]
            error_msg = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            self._record_failure(error_msg)
            raise RPCError(
                f"RPC error from {self.name} for {method}: {error_msg}",
                details={**details, "error": error},
            )

        self.stats.successful_requests += 1
        self.stats.total_latency_ms += latency_ms
        self.stats.last_success_ts = int(time.time() * 1000)

        logger.debug(
            f"RPC {method} on {self.name}",
            extra={"context": {"latency_ms": latency_ms}},
        )

        return RPCResponse(
            result=result.get("result"),
            latency_ms=latency_ms,
            endpoint_used=self.rpc_url,
        )

    def _record_failure(self, error: str) -> None:
        self.stats.failed_requests += 1
        self.stats.last_error = error
        logger.debug(f"RPC failed for {self.name}: {error}")

    async def get_chain_id(self) -> int:
        """Get chain ID from RPC."""
        response = await self.call("eth_chainId")
        return int(response.result, 16)

    async def eth_call(
        self,
        to: str,
        data: str,
        block: str = "latest",
    ) -> RPCResponse:
        """
        Make eth_call.

        Args:
            to: Contract address
            data: Encoded call data
            block: Block number or "latest"

        Returns:
            RPCResponse with call result
        """
        return await self.call(
            "eth_call",
            [{"to": to, "data": data}, block],
        )

    async def get_balance(self, address: str, block: str = "latest") -> int:
        """Native balance in wei."""
        response = await self.call("eth_getBalance", [address, block])
        return int(response.result, 16)

    async def get_transaction_count(self, address: str, block: str = "pending") -> int:
        """Next nonce for address."""
        response = await self.call("eth_getTransactionCount", [address, block])
        return int(response.result, 16)

    async def get_gas_price(self) -> int:
        """Current gas price in wei."""
        response = await self.call("eth_gasPrice")
        return int(response.result, 16)

    async def estimate_gas(self, tx: dict[str, Any]) -> int:
        """
        Estimate gas for a transaction.

        Args:
            tx: Dict with from/to/data and optional value (int wei)
        """
        params = {key: value for key, value in tx.items() if key != "value"}
        if tx.get("value"):
            params["value"] = hex(tx["value"])
        response = await self.call("eth_estimateGas", [params])
        return int(response.result, 16)

    async def send_raw_transaction(self, raw_tx: str) -> str:
        """Broadcast a signed transaction; returns the transaction hash."""
        response = await self.call("eth_sendRawTransaction", [raw_tx])
        return response.result

    async def get_transaction_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        """
        Get a transaction receipt.

        Returns:
            Receipt with integer fields decoded, or None if not yet included
        """
        response = await self.call("eth_getTransactionReceipt", [tx_hash])
        receipt = response.result
        if receipt is None:
            return None
        return {
            "transaction_hash": receipt.get("transactionHash", tx_hash),
            "status": _hex_to_int(receipt.get("status")),
            "block_number": _hex_to_int(receipt.get("blockNumber")),
            "gas_used": _hex_to_int(receipt.get("gasUsed")),
            "effective_gas_price": _hex_to_int(receipt.get("effectiveGasPrice")),
        }

    def get_stats_summary(self) -> dict:
        """Get statistics summary for this endpoint."""
        return {
            "network": self.name,
            "total_requests": self.stats.total_requests,
            "success_rate": round(self.stats.success_rate, 3),
            "avg_latency_ms": self.stats.avg_latency_ms,
            "last_error": self.stats.last_error,
        }
