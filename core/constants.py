# PATH: core/constants.py
"""
Constants for the teleport demo.

Contains enums, protocol constants and configuration defaults.
"""

from decimal import Decimal
from enum import Enum
from typing import Final

# =============================================================================
# PROTOCOL CONSTANTS
# =============================================================================

# Gas limit embedded in every transfer instruction for the destination call
REQUIRED_GAS_LIMIT: Final[int] = 250_000

ZERO_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"

# Approvals are granted for the full uint256 range
MAX_UINT256: Final[int] = 2**256 - 1

# Decimal precision of the home stablecoin and the remote native asset
TOKEN_DECIMALS: Final[int] = 6
NATIVE_DECIMALS: Final[int] = 18

# =============================================================================
# RUN DEFAULTS (overridable via config/teleport.yaml or CLI)
# =============================================================================

DEFAULT_AMOUNT: Final[Decimal] = Decimal("0.001")
DEFAULT_WAIT_SECONDS: Final[int] = 60
DEFAULT_TOLERANCE: Final[Decimal] = Decimal("0.01")  # 1% of amount
DEFAULT_RECEIPT_TIMEOUT_SECONDS: Final[int] = 180
DEFAULT_RECEIPT_POLL_INTERVAL_SECONDS: Final[float] = 2.0
DEFAULT_RPC_TIMEOUT_SECONDS: Final[int] = 30

# Report schema. Bump on any field addition/removal/rename.
SCHEMA_VERSION: Final[str] = "1.0.0"


class TeleportDirection(str, Enum):
    """Direction of a teleport run."""
    NATIVE_TO_TOKEN = "NATIVE_TO_TOKEN"
    TOKEN_TO_NATIVE = "TOKEN_TO_NATIVE"


class SettlementOutcome(str, Enum):
    """Per-side verdict of the settlement check."""
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class ErrorCode(str, Enum):
    """
    Error codes for typed exceptions.

    Values are stable; they appear in logs and JSON reports.
    """
    # Configuration
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"

    # Pre-flight
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"

    # Transactions
    APPROVAL_FAILED = "APPROVAL_FAILED"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"
    TX_REVERTED = "TX_REVERTED"
    RECEIPT_TIMEOUT = "RECEIPT_TIMEOUT"

    # Infrastructure
    INFRA_RPC_ERROR = "INFRA_RPC_ERROR"
    INFRA_TIMEOUT = "INFRA_TIMEOUT"

    # Data
    VALIDATION_ERROR = "VALIDATION_ERROR"

    UNKNOWN = "UNKNOWN"
