"""
config/teleport.py - Teleport run configuration.

TeleportConfig is built once at process entry and passed to every component.
Nothing below the entrypoint reads the environment.
"""

import math
import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Mapping

from eth_account import Account

from chains.abi import blockchain_id_to_bytes, checksum
from config import load_teleport_settings
from core.constants import (
    DEFAULT_AMOUNT,
    DEFAULT_RECEIPT_POLL_INTERVAL_SECONDS,
    DEFAULT_RECEIPT_TIMEOUT_SECONDS,
    DEFAULT_RPC_TIMEOUT_SECONDS,
    DEFAULT_TOLERANCE,
    DEFAULT_WAIT_SECONDS,
    NATIVE_DECIMALS,
    TOKEN_DECIMALS,
    ErrorCode,
    TeleportDirection,
)
from core.exceptions import ConfigError, ValidationError

COMMON_ENV_VARS = (
    "HOME_CHAIN_RPC_URL",
    "REMOTE_CHAIN_RPC_URL",
    "ERC20_HOME_C_CHAIN",
    "ERC20_HOME_TRANSFERER_C_CHAIN",
    "NATIVE_TOKEN_REMOTE_SUBNET",
    "FUNDED_ADDRESS",
    "PKXKOVA",
    "L1NAME",
)

# Destination chain of each direction
DESTINATION_ENV_VAR = {
    TeleportDirection.NATIVE_TO_TOKEN: "C_CHAIN_BLOCKCHAIN_ID_HEX",
    TeleportDirection.TOKEN_TO_NATIVE: "SUBNET_BLOCKCHAIN_ID_HEX",
}


def required_env_vars(direction: TeleportDirection) -> tuple[str, ...]:
    return COMMON_ENV_VARS + (DESTINATION_ENV_VAR[direction],)


@dataclass(frozen=True)
class TeleportConfig:
    """Immutable settings for one teleport run."""
    direction: TeleportDirection
    home_rpc_url: str
    remote_rpc_url: str
    destination_blockchain_id: bytes
    token_address: str
    token_transferer_address: str
    native_token_remote_address: str
    funded_address: str
    chain_label: str
    private_key: str = field(repr=False)

    amount: Decimal = DEFAULT_AMOUNT
    wait_seconds: float = DEFAULT_WAIT_SECONDS
    tolerance: Decimal = DEFAULT_TOLERANCE
    token_decimals: int = TOKEN_DECIMALS
    native_decimals: int = NATIVE_DECIMALS
    receipt_timeout_seconds: float = DEFAULT_RECEIPT_TIMEOUT_SECONDS
    receipt_poll_interval_seconds: float = DEFAULT_RECEIPT_POLL_INTERVAL_SECONDS
    rpc_timeout_seconds: int = DEFAULT_RPC_TIMEOUT_SECONDS

    def describe(self) -> dict[str, Any]:
        """Loggable view; excludes the key and RPC URLs."""
        return {
            "direction": self.direction.value,
            "chain_label": self.chain_label,
            "destination_blockchain_id": "0x" + self.destination_blockchain_id.hex(),
            "token_address": self.token_address,
            "token_transferer_address": self.token_transferer_address,
            "native_token_remote_address": self.native_token_remote_address,
            "funded_address": self.funded_address,
            "amount": str(self.amount),
            "wait_seconds": self.wait_seconds,
        }


def _decimal_setting(settings: Mapping[str, Any], key: str, default: Decimal) -> Decimal:
    raw = settings.get(key)
    if raw is None:
        return default
    try:
        value = Decimal(str(raw))
    except InvalidOperation as e:
        raise ConfigError(f"Setting {key} is not a number: {raw!r}") from e
    if not value.is_finite() or value <= 0:
        raise ConfigError(f"Setting {key} must be positive: {raw}")
    return value


def _seconds_setting(settings: Mapping[str, Any], key: str, default: float) -> float:
    raw = settings.get(key, default)
    try:
        value = float(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Setting {key} is not a number: {raw!r}") from e
    if not math.isfinite(value) or value < 0:
        raise ConfigError(f"Setting {key} must be a finite, non-negative number: {raw}")
    return value


def load_teleport_config(
    direction: TeleportDirection,
    env: Mapping[str, str] | None = None,
    settings: Mapping[str, Any] | None = None,
    settings_path: Path | None = None,
    **overrides: Any,
) -> TeleportConfig:
    """
    Build the run configuration.

    Args:
        direction: Teleport direction
        env: Environment mapping (defaults to os.environ)
        settings: Run defaults (defaults to config/teleport.yaml)
        settings_path: Alternative YAML file for run defaults
        **overrides: Non-None values replace settings (amount, wait_seconds, ...)

    Raises:
        ConfigError: Missing or malformed values. Lists every missing variable.
    """
    env = os.environ if env is None else env
    if settings is None:
        settings = load_teleport_settings(settings_path)
    merged = {**settings, **{k: v for k, v in overrides.items() if v is not None}}

    names = required_env_vars(direction)
    missing = [name for name in names if not env.get(name)]
    if missing:
        raise ConfigError(
            "One or more required environment variables are missing: " + ", ".join(missing),
            code=ErrorCode.CONFIG_MISSING,
            details={"missing": missing},
        )

    try:
        destination_id = blockchain_id_to_bytes(env[DESTINATION_ENV_VAR[direction]])
        token_address = checksum(env["ERC20_HOME_C_CHAIN"])
        transferer = checksum(env["ERC20_HOME_TRANSFERER_C_CHAIN"])
        native_remote = checksum(env["NATIVE_TOKEN_REMOTE_SUBNET"])
        funded = checksum(env["FUNDED_ADDRESS"])
    except ValidationError as e:
        raise ConfigError(e.message, details=e.details) from e

    private_key = env["PKXKOVA"]
    try:
        Account.from_key(private_key)
    except Exception as e:  # eth-keys raises several unrelated types
        raise ConfigError("PKXKOVA is not a valid private key") from e

    wait_seconds = _seconds_setting(merged, "wait_seconds", DEFAULT_WAIT_SECONDS)
    receipt_timeout = _seconds_setting(
        merged, "receipt_timeout_seconds", DEFAULT_RECEIPT_TIMEOUT_SECONDS
    )
    poll_interval = _seconds_setting(
        merged, "receipt_poll_interval_seconds", DEFAULT_RECEIPT_POLL_INTERVAL_SECONDS
    )

    try:
        return TeleportConfig(
            direction=direction,
            home_rpc_url=env["HOME_CHAIN_RPC_URL"],
            remote_rpc_url=env["REMOTE_CHAIN_RPC_URL"],
            destination_blockchain_id=destination_id,
            token_address=token_address,
            token_transferer_address=transferer,
            native_token_remote_address=native_remote,
            funded_address=funded,
            chain_label=env["L1NAME"],
            private_key=private_key,
            amount=_decimal_setting(merged, "amount", DEFAULT_AMOUNT),
            wait_seconds=wait_seconds,
            tolerance=_decimal_setting(merged, "tolerance", DEFAULT_TOLERANCE),
            token_decimals=int(merged.get("token_decimals", TOKEN_DECIMALS)),
            native_decimals=int(merged.get("native_decimals", NATIVE_DECIMALS)),
            receipt_timeout_seconds=receipt_timeout,
            receipt_poll_interval_seconds=poll_interval,
            rpc_timeout_seconds=int(merged.get("rpc_timeout_seconds", DEFAULT_RPC_TIMEOUT_SECONDS)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid teleport setting: {e}") from e
