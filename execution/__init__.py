# PATH: execution/__init__.py
"""
Teleport execution layer.

- balances: balance reader (home token, remote native)
- allowance: ERC20 allowance manager (stablecoin -> native)
- submitter: transfer instruction builder and submitter
- settlement: pure settlement classification
- teleport: sequential flow wiring the above
"""

from execution.allowance import AllowanceManager
from execution.balances import BalanceReader
from execution.settlement import classify_settlement, within_tolerance
from execution.submitter import TransferSubmitter, build_transfer_instruction
from execution.teleport import TeleportFlow, build_teleport_flow

__all__ = [
    "AllowanceManager",
    "BalanceReader",
    "classify_settlement",
    "within_tolerance",
    "TransferSubmitter",
    "build_transfer_instruction",
    "TeleportFlow",
    "build_teleport_flow",
]
