# PATH: execution/allowance.py
"""
Allowance manager (stablecoin -> native only).

If the transferer's allowance is below the pending amount, one approval for
MAX_UINT256 is submitted and awaited. The unlimited allowance avoids repeat
approvals across test runs; acceptable for a demo wallet only.
"""

from chains.abi import decode_uint256, encode_allowance, encode_approve
from chains.providers import RPCProvider
from chains.signer import TransactionSigner
from core.constants import MAX_UINT256
from core.exceptions import ApprovalError, InfraError, SubmissionError
from core.logging import get_logger, log_transfer
from core.models import ApprovalOutcome

logger = get_logger(__name__)


class AllowanceManager:
    """Checks and raises an ERC20 allowance for one spender."""

    def __init__(
        self,
        provider: RPCProvider,
        signer: TransactionSigner,
        token_address: str,
        spender: str,
    ):
        self.provider = provider
        self.signer = signer
        self.token_address = token_address
        self.spender = spender

    async def get_allowance(self, owner: str) -> int:
        response = await self.provider.eth_call(
            self.token_address, encode_allowance(owner, self.spender)
        )
        return decode_uint256(response.result)

    async def ensure_allowance(self, owner: str, required: int) -> ApprovalOutcome:
        """
        Make sure spender may move `required` base units from owner.

        Raises:
            ApprovalError: Approval could not be submitted or was not included
        """
        current = await self.get_allowance(owner)
        if current >= required:
            logger.info(
                "Sufficient allowance available.",
                extra={"context": {"allowance": str(current), "required": str(required)}},
            )
            return ApprovalOutcome(current_allowance=current, required=required)

        logger.info(
            "Insufficient allowance. Approving maximum amount...",
            extra={"context": {"allowance": str(current), "required": str(required)}},
        )
        try:
            receipt = await self.signer.transact(
                self.token_address, encode_approve(self.spender, MAX_UINT256)
            )
        except (SubmissionError, InfraError) as e:
            raise ApprovalError(
                f"Approval failed: {e}",
                details={"spender": self.spender, "cause": e.to_dict()},
            ) from e

        log_transfer(logger, "Approval", receipt.tx_hash, "included", receipt.gas_used)
        return ApprovalOutcome(
            current_allowance=current,
            required=required,
            approved=True,
            receipt=receipt,
        )
