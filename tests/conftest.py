# PATH: tests/conftest.py
"""
Pytest configuration and fixtures for teleport tests.
"""

import sys
from decimal import Decimal
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.teleport import TeleportConfig  # noqa: E402
from core.constants import TeleportDirection  # noqa: E402

# Well-known development key (never funded on a real network)
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

TOKEN_ADDRESS = "0x" + "11" * 20
TRANSFERER_ADDRESS = "0x" + "22" * 20
NATIVE_REMOTE_ADDRESS = "0x" + "33" * 20
C_CHAIN_ID_HEX = "0x" + "ab" * 32
SUBNET_ID_HEX = "0x" + "cd" * 32


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def make_env(**overrides) -> dict:
    """Complete environment for both directions."""
    env = {
        "HOME_CHAIN_RPC_URL": "http://home.invalid/rpc",
        "REMOTE_CHAIN_RPC_URL": "http://remote.invalid/rpc",
        "C_CHAIN_BLOCKCHAIN_ID_HEX": C_CHAIN_ID_HEX,
        "SUBNET_BLOCKCHAIN_ID_HEX": SUBNET_ID_HEX,
        "ERC20_HOME_C_CHAIN": TOKEN_ADDRESS,
        "ERC20_HOME_TRANSFERER_C_CHAIN": TRANSFERER_ADDRESS,
        "NATIVE_TOKEN_REMOTE_SUBNET": NATIVE_REMOTE_ADDRESS,
        "FUNDED_ADDRESS": TEST_ADDRESS,
        "PKXKOVA": TEST_PRIVATE_KEY,
        "L1NAME": "Kova",
    }
    env.update(overrides)
    return env


def make_config(direction: TeleportDirection, **overrides) -> TeleportConfig:
    """TeleportConfig without touching env or YAML."""
    from eth_utils import to_checksum_address

    destination = C_CHAIN_ID_HEX if direction == TeleportDirection.NATIVE_TO_TOKEN else SUBNET_ID_HEX
    values = dict(
        direction=direction,
        home_rpc_url="http://home.invalid/rpc",
        remote_rpc_url="http://remote.invalid/rpc",
        destination_blockchain_id=bytes.fromhex(destination[2:]),
        token_address=to_checksum_address(TOKEN_ADDRESS),
        token_transferer_address=to_checksum_address(TRANSFERER_ADDRESS),
        native_token_remote_address=to_checksum_address(NATIVE_REMOTE_ADDRESS),
        funded_address=TEST_ADDRESS,
        chain_label="Kova",
        private_key=TEST_PRIVATE_KEY,
        amount=Decimal("0.001"),
        wait_seconds=60,
        receipt_poll_interval_seconds=0,
    )
    values.update(overrides)
    return TeleportConfig(**values)


@pytest.fixture
def native_to_token_config() -> TeleportConfig:
    return make_config(TeleportDirection.NATIVE_TO_TOKEN)


@pytest.fixture
def token_to_native_config() -> TeleportConfig:
    return make_config(TeleportDirection.TOKEN_TO_NATIVE)
