# PATH: execution/submitter.py
"""
Transfer submitter.

NATIVE_TO_TOKEN: send(input) payable on the remote network, amount attached
as transaction value.
TOKEN_TO_NATIVE: send(input, amount) on the home network, amount passed as
an explicit 6-decimal parameter.

Every fault surfaces as SubmissionError; callers must not verify settlement
after one.
"""

from chains.abi import checksum, encode_send_native, encode_send_token
from chains.signer import TransactionSigner
from core.constants import REQUIRED_GAS_LIMIT, ZERO_ADDRESS
from core.exceptions import InfraError, SubmissionError
from core.logging import get_logger, log_transfer
from core.models import TransferInstruction, TransferReceipt

logger = get_logger(__name__)


def build_transfer_instruction(
    destination_blockchain_id: bytes,
    destination_contract: str,
    recipient: str,
    asset_address: str = ZERO_ADDRESS,
) -> TransferInstruction:
    """
    Build the fixed-shape instruction.

    Amount and fee fields are always zero, the gas limit is always 250000 and
    there is no fee recipient.
    """
    return TransferInstruction(
        destination_blockchain_id=destination_blockchain_id,
        destination_contract=checksum(destination_contract),
        recipient=checksum(recipient),
        asset_address=checksum(asset_address),
        amount=0,
        fee_amount=0,
        required_gas_limit=REQUIRED_GAS_LIMIT,
        fee_recipient=ZERO_ADDRESS,
    )


class TransferSubmitter:
    """Submits the teleport transaction and waits for inclusion."""

    def __init__(self, signer: TransactionSigner, contract_address: str):
        self.signer = signer
        self.contract_address = contract_address

    async def _submit(self, label: str, data: str, value: int = 0) -> TransferReceipt:
        try:
            receipt = await self.signer.transact(self.contract_address, data, value=value)
        except SubmissionError:
            raise
        except InfraError as e:
            raise SubmissionError(
                f"{label} submission failed: {e}",
                details={"contract": self.contract_address, "cause": e.to_dict()},
            ) from e

        log_transfer(
            logger,
            label,
            receipt.tx_hash,
            "sent",
            receipt.gas_used,
            effective_gas_price=receipt.effective_gas_price,
            block_number=receipt.block_number,
        )
        return receipt

    async def send_native(self, instruction: TransferInstruction, amount_wei: int) -> TransferReceipt:
        """Native asset attached as value; instruction amount stays zero."""
        return await self._submit("Teleport", encode_send_native(instruction), value=amount_wei)

    async def send_token(self, instruction: TransferInstruction, amount: int) -> TransferReceipt:
        """Token amount (base units) passed alongside the instruction."""
        return await self._submit("Teleport", encode_send_token(instruction, amount))
