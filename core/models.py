# PATH: core/models.py
"""
Core data models for the teleport demo.

All values are process-scoped and immutable once built. Money is Decimal in
display units (token: 6 decimals, native: 18 decimals); on-chain quantities
are int base units.

TRANSFER INSTRUCTION CONTRACT
=============================
ABI tuple: (bytes32,address,address,address,uint256,uint256,uint256,address)

  destination_blockchain_id  bytes32, destination chain
  destination_contract       paired transferer on the destination chain
  recipient                  address credited on the destination chain
  asset_address              token address, zero address for native
  amount                     always 0; the quantity travels as tx value
                             (native) or as the explicit uint256 parameter
                             (token)
  fee_amount                 always 0
  required_gas_limit         always 250000
  fee_recipient              always zero address
=============================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from core.constants import (
    REQUIRED_GAS_LIMIT,
    ZERO_ADDRESS,
    SettlementOutcome,
    TeleportDirection,
)


@dataclass(frozen=True)
class TransferInstruction:
    """Fixed-shape cross-chain transfer instruction."""
    destination_blockchain_id: bytes
    destination_contract: str
    recipient: str
    asset_address: str = ZERO_ADDRESS
    amount: int = 0
    fee_amount: int = 0
    required_gas_limit: int = REQUIRED_GAS_LIMIT
    fee_recipient: str = ZERO_ADDRESS

    def as_abi_tuple(self) -> Tuple[bytes, str, str, str, int, int, int, str]:
        """Values in ABI tuple order."""
        return (
            self.destination_blockchain_id,
            self.destination_contract,
            self.recipient,
            self.asset_address,
            self.amount,
            self.fee_amount,
            self.required_gas_limit,
            self.fee_recipient,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "destination_blockchain_id": "0x" + self.destination_blockchain_id.hex(),
            "destination_contract": self.destination_contract,
            "recipient": self.recipient,
            "asset_address": self.asset_address,
            "amount": self.amount,
            "fee_amount": self.fee_amount,
            "required_gas_limit": self.required_gas_limit,
            "fee_recipient": self.fee_recipient,
        }


@dataclass(frozen=True)
class BalanceSnapshot:
    """Token and native balance of one address at one point in time."""
    address: str
    token_balance: Decimal
    native_balance: Decimal
    taken_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "token_balance": str(self.token_balance),
            "native_balance": str(self.native_balance),
            "taken_at": self.taken_at.isoformat(),
        }


@dataclass(frozen=True)
class TransferReceipt:
    """Execution metadata of an included transaction."""
    tx_hash: str
    gas_used: Optional[int] = None
    effective_gas_price: Optional[int] = None
    block_number: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tx_hash": self.tx_hash,
            "gas_used": self.gas_used,
            "effective_gas_price": self.effective_gas_price,
            "block_number": self.block_number,
        }


@dataclass(frozen=True)
class ApprovalOutcome:
    """Result of the allowance check."""
    current_allowance: int
    required: int
    approved: bool = False
    receipt: Optional[TransferReceipt] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_allowance": str(self.current_allowance),
            "required": str(self.required),
            "approved": self.approved,
            "tx_hash": self.receipt.tx_hash if self.receipt else None,
        }


@dataclass(frozen=True)
class SettlementResult:
    """Classification of the observed balance deltas."""
    direction: TeleportDirection
    amount: Decimal
    token_delta: Decimal
    native_delta: Decimal
    token_outcome: SettlementOutcome
    native_outcome: SettlementOutcome
    gas_cost: Decimal = Decimal("0")
    tolerance: Decimal = Decimal("0")
    expected_native_delta: Optional[Decimal] = None

    @property
    def is_success(self) -> bool:
        return (
            self.token_outcome == SettlementOutcome.SUCCESS
            and self.native_outcome == SettlementOutcome.SUCCESS
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "direction": self.direction.value,
            "amount": str(self.amount),
            "token_delta": str(self.token_delta),
            "native_delta": str(self.native_delta),
            "expected_native_delta": (
                str(self.expected_native_delta)
                if self.expected_native_delta is not None
                else None
            ),
            "gas_cost": str(self.gas_cost),
            "tolerance": str(self.tolerance),
            "token_outcome": self.token_outcome.value,
            "native_outcome": self.native_outcome.value,
            "success": self.is_success,
        }


@dataclass
class TeleportResult:
    """Everything observed during one completed teleport run."""
    direction: TeleportDirection
    amount: Decimal
    before: BalanceSnapshot
    after: BalanceSnapshot
    receipt: TransferReceipt
    settlement: SettlementResult
    approval: Optional[ApprovalOutcome] = None

    @property
    def is_success(self) -> bool:
        return self.settlement.is_success

    def to_dict(self) -> Dict[str, Any]:
        return {
            "direction": self.direction.value,
            "amount": str(self.amount),
            "before": self.before.to_dict(),
            "after": self.after.to_dict(),
            "approval": self.approval.to_dict() if self.approval else None,
            "receipt": self.receipt.to_dict(),
            "settlement": self.settlement.to_dict(),
        }
