"""
chains/signer.py - Local transaction signing and inclusion wait.

Builds legacy transactions (nonce, gas price and gas estimate fetched from the
provider), signs them with eth-account and broadcasts the raw bytes.
"""

import asyncio
from typing import Any

from eth_account import Account

from chains.providers import RPCProvider
from core.constants import (
    DEFAULT_RECEIPT_POLL_INTERVAL_SECONDS,
    DEFAULT_RECEIPT_TIMEOUT_SECONDS,
)
from core.exceptions import ReceiptTimeoutError, TransactionRevertedError
from core.logging import get_logger
from core.models import TransferReceipt
from core.time import monotonic_s

logger = get_logger(__name__)


class TransactionSigner:
    """
    Signs and submits transactions on one network with one key.
    """

    def __init__(
        self,
        provider: RPCProvider,
        private_key: str,
        receipt_timeout_seconds: float = DEFAULT_RECEIPT_TIMEOUT_SECONDS,
        poll_interval_seconds: float = DEFAULT_RECEIPT_POLL_INTERVAL_SECONDS,
    ):
        self.provider = provider
        self._account = Account.from_key(private_key)
        self.receipt_timeout_seconds = receipt_timeout_seconds
        self.poll_interval_seconds = poll_interval_seconds
        self._chain_id: int | None = None

    def __repr__(self) -> str:
        return f"TransactionSigner(network={self.provider.name!r}, address={self.address!r})"

    @property
    def address(self) -> str:
        return self._account.address

    async def _chain_id_cached(self) -> int:
        if self._chain_id is None:
            self._chain_id = await self.provider.get_chain_id()
        return self._chain_id

    async def build_transaction(self, to: str, data: str, value: int = 0) -> dict[str, Any]:
        """Fill nonce, gas, gas price and chain ID for a call."""
        chain_id = await self._chain_id_cached()
        nonce = await self.provider.get_transaction_count(self.address)
        gas_price = await self.provider.get_gas_price()
        gas = await self.provider.estimate_gas(
            {"from": self.address, "to": to, "data": data, "value": value}
        )
        return {
            "chainId": chain_id,
            "nonce": nonce,
            "to": to,
            "value": value,
            "data": data,
            "gas": gas,
            "gasPrice": gas_price,
        }

    async def send_transaction(self, to: str, data: str, value: int = 0) -> str:
        """
        Sign and broadcast a transaction.

        Returns:
            Transaction hash (0x-prefixed hex)
        """
        tx = await self.build_transaction(to, data, value)
        signed = self._account.sign_transaction(tx)
        raw_tx = "0x" + bytes(signed.raw_transaction).hex()
        tx_hash = await self.provider.send_raw_transaction(raw_tx)

        logger.debug(
            f"Broadcast transaction on {self.provider.name}",
            extra={"context": {"tx_hash": tx_hash, "nonce": tx["nonce"], "gas": tx["gas"]}},
        )
        return tx_hash

    async def wait_for_receipt(self, tx_hash: str) -> TransferReceipt:
        """
        Block until the transaction is included.

        Raises:
            ReceiptTimeoutError: No receipt within receipt_timeout_seconds
            TransactionRevertedError: Receipt status is 0
        """
        deadline = monotonic_s() + self.receipt_timeout_seconds

        while True:
            receipt = await self.provider.get_transaction_receipt(tx_hash)
            if receipt is not None:
                break
            if monotonic_s() >= deadline:
                raise ReceiptTimeoutError(
                    f"Transaction {tx_hash} not included after {self.receipt_timeout_seconds}s",
                    details={"tx_hash": tx_hash, "network": self.provider.name},
                )
            await asyncio.sleep(self.poll_interval_seconds)

        result = TransferReceipt(
            tx_hash=receipt["transaction_hash"],
            gas_used=receipt["gas_used"],
            effective_gas_price=receipt["effective_gas_price"],
            block_number=receipt["block_number"],
        )

        if receipt["status"] == 0:
            raise TransactionRevertedError(
                f"Transaction {tx_hash} reverted",
                details=result.to_dict(),
            )
        return result

    async def transact(self, to: str, data: str, value: int = 0) -> TransferReceipt:
        """Send and wait for inclusion."""
        tx_hash = await self.send_transaction(to, data, value)
        return await self.wait_for_receipt(tx_hash)
