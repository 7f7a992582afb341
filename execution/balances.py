# PATH: execution/balances.py
"""
Balance reader.

Token balance is read on the home network (ERC20 balanceOf), native balance
on the remote network (eth_getBalance). Read-only; RPC faults propagate.
"""

from chains.abi import decode_uint256, encode_balance_of
from chains.providers import RPCProvider
from core.constants import NATIVE_DECIMALS, TOKEN_DECIMALS
from core.math import from_base_units
from core.models import BalanceSnapshot


class BalanceReader:
    """Reads the two balances tracked by a teleport run."""

    def __init__(
        self,
        home: RPCProvider,
        remote: RPCProvider,
        token_address: str,
        token_decimals: int = TOKEN_DECIMALS,
        native_decimals: int = NATIVE_DECIMALS,
    ):
        self.home = home
        self.remote = remote
        self.token_address = token_address
        self.token_decimals = token_decimals
        self.native_decimals = native_decimals

    async def token_balance_raw(self, address: str) -> int:
        response = await self.home.eth_call(self.token_address, encode_balance_of(address))
        return decode_uint256(response.result)

    async def native_balance_raw(self, address: str) -> int:
        return await self.remote.get_balance(address)

    async def snapshot(self, address: str) -> BalanceSnapshot:
        """Token and native balance of address, in display units."""
        token_raw = await self.token_balance_raw(address)
        native_raw = await self.native_balance_raw(address)
        return BalanceSnapshot(
            address=address,
            token_balance=from_base_units(token_raw, self.token_decimals),
            native_balance=from_base_units(native_raw, self.native_decimals),
        )
