# PATH: core/exceptions.py
"""
Typed exceptions for the teleport demo.

Every fault is wrapped into this taxonomy close to its origin and then
propagates unchanged. Nothing is retried.
"""

from typing import Optional

from core.constants import ErrorCode


class TeleportError(Exception):
    """Base exception for teleport runs."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self):
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> dict:
        return {"code": self.code.value, "message": self.message, "details": self.details}


class ConfigError(TeleportError):
    """Required settings absent or malformed. Raised before any network call."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
        details: Optional[dict] = None,
    ):
        super().__init__(message, code, details)


class ValidationError(TeleportError):
    """Invalid amount, address or encoding."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class InsufficientFundsError(TeleportError):
    """Funded address cannot cover the transfer; nothing was submitted."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, ErrorCode.INSUFFICIENT_FUNDS, details)


class ApprovalError(TeleportError):
    """Allowance-raising transaction failed or was not included."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, ErrorCode.APPROVAL_FAILED, details)


class SubmissionError(TeleportError):
    """Transaction submission or inclusion failed."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SUBMISSION_FAILED,
        details: Optional[dict] = None,
    ):
        super().__init__(message, code, details)


class TransactionRevertedError(SubmissionError):
    """Transaction was included with status 0."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, ErrorCode.TX_REVERTED, details)


class ReceiptTimeoutError(SubmissionError):
    """No receipt appeared within the inclusion timeout."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, ErrorCode.RECEIPT_TIMEOUT, details)


class InfraError(TeleportError):
    """Infrastructure-related errors (RPC, timeouts)."""
    pass


class RPCError(InfraError):
    """RPC call failed."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, ErrorCode.INFRA_RPC_ERROR, details)


class RPCTimeoutError(InfraError):
    """RPC call timed out."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, ErrorCode.INFRA_TIMEOUT, details)
