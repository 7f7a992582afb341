# PATH: execution/teleport.py
"""
Teleport flow.

One strictly sequential run:
  balances -> (allowance, TOKEN_TO_NATIVE only) -> submit -> fixed wait
  -> balances -> settlement

The fixed wait is best effort: if cross-chain delivery takes longer, the
settlement check reports a failure. Any fault before the wait aborts the run
and settlement is never classified.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from chains.providers import RPCProvider
from chains.signer import TransactionSigner
from config.teleport import TeleportConfig
from core.constants import TeleportDirection, ZERO_ADDRESS
from core.exceptions import InsufficientFundsError
from core.format_money import format_delta, format_money
from core.logging import get_logger
from core.math import from_base_units, gas_cost_wei, to_base_units
from core.models import ApprovalOutcome, BalanceSnapshot, TeleportResult, TransferReceipt
from execution.allowance import AllowanceManager
from execution.balances import BalanceReader
from execution.settlement import classify_settlement
from execution.submitter import TransferSubmitter, build_transfer_instruction

logger = get_logger("teleport.flow")

Sleep = Callable[[float], Awaitable[None]]


class TeleportFlow:
    """Runs one teleport in the configured direction."""

    def __init__(
        self,
        config: TeleportConfig,
        balances: BalanceReader,
        submitter: TransferSubmitter,
        allowance: Optional[AllowanceManager] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        if config.direction == TeleportDirection.TOKEN_TO_NATIVE and allowance is None:
            raise ValueError("TOKEN_TO_NATIVE teleport requires an AllowanceManager")
        self.config = config
        self.balances = balances
        self.submitter = submitter
        self.allowance = allowance
        self._sleep = sleep

    @property
    def direction(self) -> TeleportDirection:
        return self.config.direction

    def _source_decimals(self) -> int:
        if self.direction == TeleportDirection.NATIVE_TO_TOKEN:
            return self.config.native_decimals
        return self.config.token_decimals

    def _source_asset(self) -> str:
        if self.direction == TeleportDirection.NATIVE_TO_TOKEN:
            return f"{self.config.chain_label} native tokens"
        return "USDC"

    def _log_snapshot(self, stage: str, snapshot: BalanceSnapshot) -> None:
        cfg = self.config
        logger.info(
            f"{stage} C-Chain USDC balance: {format_money(snapshot.token_balance, cfg.token_decimals)} USDC"
        )
        logger.info(
            f"{stage} {cfg.chain_label} native balance: "
            f"{format_money(snapshot.native_balance, cfg.native_decimals)} tokens"
        )

    def _check_funds(self, before: BalanceSnapshot) -> None:
        """Abort before any transaction if the source balance is short."""
        amount = self.config.amount
        if self.direction == TeleportDirection.NATIVE_TO_TOKEN:
            available = before.native_balance
        else:
            available = before.token_balance

        if available < amount:
            raise InsufficientFundsError(
                f"Insufficient {self._source_asset()} balance. "
                f"Required: {amount}, Available: {available}",
                details={"required": str(amount), "available": str(available)},
            )
        logger.info(f"Sufficient {self._source_asset()} balance available. Proceeding with transaction.")

    async def _submit(self) -> tuple[TransferReceipt, Optional[ApprovalOutcome]]:
        cfg = self.config

        if self.direction == TeleportDirection.NATIVE_TO_TOKEN:
            instruction = build_transfer_instruction(
                destination_blockchain_id=cfg.destination_blockchain_id,
                destination_contract=cfg.token_transferer_address,
                recipient=cfg.funded_address,
                asset_address=ZERO_ADDRESS,
            )
            amount_wei = to_base_units(cfg.amount, cfg.native_decimals)
            receipt = await self.submitter.send_native(instruction, amount_wei)
            return receipt, None

        amount_units = to_base_units(cfg.amount, cfg.token_decimals)
        approval = await self.allowance.ensure_allowance(cfg.funded_address, amount_units)
        instruction = build_transfer_instruction(
            destination_blockchain_id=cfg.destination_blockchain_id,
            destination_contract=cfg.native_token_remote_address,
            recipient=cfg.funded_address,
            asset_address=cfg.token_address,
        )
        receipt = await self.submitter.send_token(instruction, amount_units)
        return receipt, approval

    async def run(self) -> TeleportResult:
        """
        Execute the teleport.

        Raises:
            InsufficientFundsError: Nothing was submitted
            ApprovalError: Allowance could not be raised; transfer not submitted
            SubmissionError: Transfer failed; settlement not verified
            InfraError: Unclassified network fault
        """
        cfg = self.config
        # Reject an unrepresentable amount before any network call
        to_base_units(cfg.amount, self._source_decimals())

        logger.info(
            f"Starting teleport of {cfg.amount} {self._source_asset()} to "
            f"{'USDC' if self.direction == TeleportDirection.NATIVE_TO_TOKEN else 'native tokens'}",
            extra={"context": {"direction": self.direction.value, "amount": str(cfg.amount)}},
        )

        before = await self.balances.snapshot(cfg.funded_address)
        self._log_snapshot("Initial", before)
        self._check_funds(before)

        receipt, approval = await self._submit()

        logger.info(
            f"Waiting {cfg.wait_seconds:g}s for transaction to be processed...",
            extra={"context": {"tx_hash": receipt.tx_hash}},
        )
        await self._sleep(cfg.wait_seconds)

        after = await self.balances.snapshot(cfg.funded_address)
        self._log_snapshot("Final", after)

        gas_cost = from_base_units(
            gas_cost_wei(receipt.gas_used, receipt.effective_gas_price),
            cfg.native_decimals,
        )
        settlement = classify_settlement(
            direction=self.direction,
            before=before,
            after=after,
            amount=cfg.amount,
            gas_cost=gas_cost,
            tolerance=cfg.tolerance,
        )

        logger.info(f"Amount transferred: {cfg.amount} tokens")
        logger.info(f"Gas cost: {format_money(gas_cost, cfg.native_decimals)} tokens")
        logger.info(
            f"Amount changed in C-Chain USDC balance: {format_delta(settlement.token_delta, cfg.token_decimals)} tokens"
        )
        logger.info(
            f"Amount changed in {cfg.chain_label} native balance: "
            f"{format_delta(settlement.native_delta, cfg.native_decimals)} tokens"
        )
        if settlement.expected_native_delta is not None:
            logger.info(
                f"Expected change in {cfg.chain_label} native balance: "
                f"{format_delta(settlement.expected_native_delta, cfg.native_decimals)} tokens"
            )

        return TeleportResult(
            direction=self.direction,
            amount=cfg.amount,
            before=before,
            after=after,
            receipt=receipt,
            settlement=settlement,
            approval=approval,
        )


def build_teleport_flow(
    config: TeleportConfig,
    home: RPCProvider,
    remote: RPCProvider,
    sleep: Sleep = asyncio.sleep,
) -> TeleportFlow:
    """
    Wire the components for config.direction.

    NATIVE_TO_TOKEN signs on the remote network, TOKEN_TO_NATIVE on the home
    network.
    """
    if config.direction == TeleportDirection.NATIVE_TO_TOKEN:
        network, contract = remote, config.native_token_remote_address
    else:
        network, contract = home, config.token_transferer_address

    signer = TransactionSigner(
        network,
        config.private_key,
        receipt_timeout_seconds=config.receipt_timeout_seconds,
        poll_interval_seconds=config.receipt_poll_interval_seconds,
    )
    if signer.address != config.funded_address:
        logger.warning(
            "Signing key does not control FUNDED_ADDRESS; balances are read for FUNDED_ADDRESS",
            extra={"context": {"signer": signer.address, "funded_address": config.funded_address}},
        )

    balances = BalanceReader(
        home,
        remote,
        config.token_address,
        token_decimals=config.token_decimals,
        native_decimals=config.native_decimals,
    )
    allowance = None
    if config.direction == TeleportDirection.TOKEN_TO_NATIVE:
        allowance = AllowanceManager(
            home, signer, config.token_address, config.token_transferer_address
        )

    return TeleportFlow(
        config,
        balances,
        TransferSubmitter(signer, contract),
        allowance=allowance,
        sleep=sleep,
    )
