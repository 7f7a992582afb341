"""
chains/abi.py - Calldata encoding for the contracts the teleport touches.

Contract surface:
- ERC20: balanceOf(address), allowance(address,address), approve(address,uint256)
- NativeTokenRemote: send(SendTokensInput) payable
- ERC20TokenHome: send(SendTokensInput, uint256)
"""

from typing import Any

from eth_abi import decode, encode
from eth_utils import (
    function_signature_to_4byte_selector,
    is_address,
    to_bytes,
    to_checksum_address,
)

from core.exceptions import ValidationError
from core.models import TransferInstruction

SEND_TOKENS_INPUT = "(bytes32,address,address,address,uint256,uint256,uint256,address)"

BALANCE_OF_SIGNATURE = "balanceOf(address)"
ALLOWANCE_SIGNATURE = "allowance(address,address)"
APPROVE_SIGNATURE = "approve(address,uint256)"
SEND_NATIVE_SIGNATURE = f"send({SEND_TOKENS_INPUT})"
SEND_TOKEN_SIGNATURE = f"send({SEND_TOKENS_INPUT},uint256)"


def _encode_call(signature: str, types: list[str], args: list[Any]) -> str:
    selector = function_signature_to_4byte_selector(signature)
    return "0x" + (selector + encode(types, args)).hex()


def checksum(address: str) -> str:
    """Validate and checksum an address."""
    if not isinstance(address, str) or not is_address(address):
        raise ValidationError(f"Invalid address: {address!r}", details={"address": address})
    return to_checksum_address(address)


def blockchain_id_to_bytes(value: str) -> bytes:
    """Decode a hex blockchain ID into exactly 32 bytes."""
    try:
        raw = to_bytes(hexstr=value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid blockchain ID: {value!r}") from e
    if len(raw) != 32:
        raise ValidationError(
            f"Blockchain ID must be 32 bytes, got {len(raw)}",
            details={"blockchain_id": value},
        )
    return raw


def encode_balance_of(owner: str) -> str:
    return _encode_call(BALANCE_OF_SIGNATURE, ["address"], [checksum(owner)])


def encode_allowance(owner: str, spender: str) -> str:
    return _encode_call(
        ALLOWANCE_SIGNATURE,
        ["address", "address"],
        [checksum(owner), checksum(spender)],
    )


def encode_approve(spender: str, amount: int) -> str:
    return _encode_call(APPROVE_SIGNATURE, ["address", "uint256"], [checksum(spender), amount])


def encode_send_native(instruction: TransferInstruction) -> str:
    """send(input): the quantity is attached as the transaction value."""
    return _encode_call(SEND_NATIVE_SIGNATURE, [SEND_TOKENS_INPUT], [instruction.as_abi_tuple()])


def encode_send_token(instruction: TransferInstruction, amount: int) -> str:
    """send(input, amount): the quantity is an explicit base-unit parameter."""
    return _encode_call(
        SEND_TOKEN_SIGNATURE,
        [SEND_TOKENS_INPUT, "uint256"],
        [instruction.as_abi_tuple(), amount],
    )


def decode_uint256(data: str) -> int:
    """Decode a single uint256 return value."""
    raw = to_bytes(hexstr=data) if data and data != "0x" else b""
    if len(raw) < 32:
        raise ValidationError(
            f"Expected 32-byte uint256 return, got {len(raw)} bytes",
            details={"data": data},
        )
    (value,) = decode(["uint256"], raw[:32])
    return value
