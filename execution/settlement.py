# PATH: execution/settlement.py
"""
Settlement verifier.

Classifies the balance change observed after a teleport. Pure function of
(before, after, amount, gas cost, direction, tolerance); produces no binding
decision (no rollback, no retry).

CLASSIFICATION CONTRACT:
========================
NATIVE_TO_TOKEN:
  token  SUCCESS iff token_delta > 0 (any increase)
  native SUCCESS iff native_delta < 0 (decrease, gas included, no magnitude)

TOKEN_TO_NATIVE:
  token  SUCCESS iff |token_delta + amount|  < tolerance * amount
  native SUCCESS iff |native_delta - amount| < tolerance * amount
  expected_native_delta = amount - gas_cost (reported only)

The two directions are intentionally asymmetric. Keep them that way.
========================
"""

from decimal import Decimal

from core.constants import DEFAULT_TOLERANCE, SettlementOutcome, TeleportDirection
from core.models import BalanceSnapshot, SettlementResult


def _outcome(passed: bool) -> SettlementOutcome:
    return SettlementOutcome.SUCCESS if passed else SettlementOutcome.FAILED


def within_tolerance(observed: Decimal, expected: Decimal, tolerance: Decimal, amount: Decimal) -> bool:
    """|observed - expected| < tolerance * amount (strict)."""
    return abs(observed - expected) < tolerance * amount


def classify_settlement(
    direction: TeleportDirection,
    before: BalanceSnapshot,
    after: BalanceSnapshot,
    amount: Decimal,
    gas_cost: Decimal = Decimal("0"),
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> SettlementResult:
    """
    Classify the outcome of a teleport from two balance snapshots.

    Args:
        direction: Teleport direction
        before: Snapshot taken before submission
        after: Snapshot taken after the fixed wait
        amount: Transferred amount (display units)
        gas_cost: Gas paid for the transfer, native display units
        tolerance: Fraction of amount allowed as deviation

    Returns:
        SettlementResult with per-side outcome and deltas
    """
    token_delta = after.token_balance - before.token_balance
    native_delta = after.native_balance - before.native_balance

    if direction == TeleportDirection.NATIVE_TO_TOKEN:
        return SettlementResult(
            direction=direction,
            amount=amount,
            token_delta=token_delta,
            native_delta=native_delta,
            token_outcome=_outcome(token_delta > 0),
            native_outcome=_outcome(native_delta < 0),
            gas_cost=gas_cost,
            tolerance=tolerance,
        )

    return SettlementResult(
        direction=direction,
        amount=amount,
        token_delta=token_delta,
        native_delta=native_delta,
        token_outcome=_outcome(within_tolerance(token_delta, -amount, tolerance, amount)),
        native_outcome=_outcome(within_tolerance(native_delta, amount, tolerance, amount)),
        gas_cost=gas_cost,
        tolerance=tolerance,
        expected_native_delta=amount - gas_cost,
    )
