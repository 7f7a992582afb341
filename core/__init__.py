"""
core - Core utilities and models for the teleport demo.

This package contains:
- models.py: Data models (TransferInstruction, BalanceSnapshot, SettlementResult)
- constants.py: Enums and protocol constants
- exceptions.py: Typed exceptions with error codes
- math.py: Unit conversions (no float)
- format_money.py: Display formatting
- logging.py: Structured logging
"""

from core.constants import (
    ErrorCode,
    MAX_UINT256,
    REQUIRED_GAS_LIMIT,
    SettlementOutcome,
    TeleportDirection,
    ZERO_ADDRESS,
)
from core.exceptions import (
    ApprovalError,
    ConfigError,
    InfraError,
    InsufficientFundsError,
    ReceiptTimeoutError,
    RPCError,
    SubmissionError,
    TeleportError,
    TransactionRevertedError,
    ValidationError,
)
from core.logging import get_logger, setup_logging
from core.models import (
    ApprovalOutcome,
    BalanceSnapshot,
    SettlementResult,
    TeleportResult,
    TransferInstruction,
    TransferReceipt,
)

__all__ = [
    # Constants
    "ErrorCode",
    "MAX_UINT256",
    "REQUIRED_GAS_LIMIT",
    "SettlementOutcome",
    "TeleportDirection",
    "ZERO_ADDRESS",
    # Exceptions
    "ApprovalError",
    "ConfigError",
    "InfraError",
    "InsufficientFundsError",
    "ReceiptTimeoutError",
    "RPCError",
    "SubmissionError",
    "TeleportError",
    "TransactionRevertedError",
    "ValidationError",
    # Models
    "ApprovalOutcome",
    "BalanceSnapshot",
    "SettlementResult",
    "TeleportResult",
    "TransferInstruction",
    "TransferReceipt",
    # Logging
    "get_logger",
    "setup_logging",
]
