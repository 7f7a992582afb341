"""
Unit tests for calldata encoding.

Decodes what was encoded to check the instruction tuple the contracts see.
"""

import pytest
from eth_abi import decode
from eth_utils import to_checksum_address

from chains.abi import (
    SEND_TOKENS_INPUT,
    blockchain_id_to_bytes,
    checksum,
    decode_uint256,
    encode_allowance,
    encode_approve,
    encode_balance_of,
    encode_send_native,
    encode_send_token,
)
from core.constants import MAX_UINT256, REQUIRED_GAS_LIMIT, ZERO_ADDRESS
from core.exceptions import ValidationError
from execution.submitter import build_transfer_instruction

OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
SPENDER = "0x" + "22" * 20
TOKEN = "0x" + "11" * 20
DEST_ID = bytes.fromhex("ab" * 32)


def _args(data: str, types: list[str]) -> tuple:
    return decode(types, bytes.fromhex(data[10:]))


class TestErc20Calls:

    def test_balance_of_selector(self):
        data = encode_balance_of(OWNER)
        assert data.startswith("0x70a08231")
        (owner,) = _args(data, ["address"])
        assert owner.lower() == OWNER.lower()

    def test_allowance_selector(self):
        data = encode_allowance(OWNER, SPENDER)
        assert data.startswith("0xdd62ed3e")
        owner, spender = _args(data, ["address", "address"])
        assert spender.lower() == SPENDER.lower()

    def test_approve_max(self):
        data = encode_approve(SPENDER, MAX_UINT256)
        assert data.startswith("0x095ea7b3")
        spender, amount = _args(data, ["address", "uint256"])
        assert amount == 2**256 - 1

    def test_invalid_address_rejected(self):
        with pytest.raises(ValidationError):
            encode_balance_of("0x1234")


class TestSendCalls:

    def test_native_send_carries_fixed_fields(self):
        instruction = build_transfer_instruction(DEST_ID, SPENDER, OWNER)
        data = encode_send_native(instruction)

        (decoded,) = _args(data, [SEND_TOKENS_INPUT])
        dest_id, dest_contract, recipient, asset, amount, fee, gas_limit, fee_recipient = decoded

        assert dest_id == DEST_ID
        assert dest_contract.lower() == SPENDER.lower()
        assert recipient.lower() == OWNER.lower()
        assert asset.lower() == ZERO_ADDRESS
        assert amount == 0
        assert fee == 0
        assert gas_limit == REQUIRED_GAS_LIMIT == 250_000
        assert fee_recipient.lower() == ZERO_ADDRESS

    def test_token_send_passes_amount_separately(self):
        instruction = build_transfer_instruction(DEST_ID, SPENDER, OWNER, asset_address=TOKEN)
        data = encode_send_token(instruction, 1000)

        decoded, amount = _args(data, [SEND_TOKENS_INPUT, "uint256"])

        assert amount == 1000
        assert decoded[3].lower() == TOKEN.lower()
        assert decoded[4] == 0
        assert decoded[5] == 0
        assert decoded[6] == 250_000
        assert decoded[7].lower() == ZERO_ADDRESS

    def test_selectors_differ_by_overload(self):
        instruction = build_transfer_instruction(DEST_ID, SPENDER, OWNER)
        assert encode_send_native(instruction)[:10] != encode_send_token(instruction, 1)[:10]


class TestHelpers:

    def test_blockchain_id_must_be_32_bytes(self):
        assert blockchain_id_to_bytes("0x" + "ab" * 32) == DEST_ID
        with pytest.raises(ValidationError):
            blockchain_id_to_bytes("0xabcd")

    def test_blockchain_id_must_be_hex(self):
        with pytest.raises(ValidationError):
            blockchain_id_to_bytes("not-hex")

    def test_checksum(self):
        assert checksum(OWNER.lower()) == to_checksum_address(OWNER)

    def test_decode_uint256(self):
        assert decode_uint256("0x" + hex(9_999_000)[2:].zfill(64)) == 9_999_000

    def test_decode_uint256_empty_return(self):
        with pytest.raises(ValidationError):
            decode_uint256("0x")
