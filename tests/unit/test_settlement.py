# PATH: tests/unit/test_settlement.py
"""
Unit tests for settlement classification.

Classification is a pure function of the two snapshots, the amount, the gas
cost, the direction and the tolerance.
"""

import unittest
from decimal import Decimal

from core.constants import SettlementOutcome, TeleportDirection
from core.models import BalanceSnapshot
from execution.settlement import classify_settlement, within_tolerance

ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
AMOUNT = Decimal("0.001")


def snap(token: str, native: str) -> BalanceSnapshot:
    return BalanceSnapshot(address=ADDRESS, token_balance=Decimal(token), native_balance=Decimal(native))


class TestTokenToNative(unittest.TestCase):
    """Tolerance-bounded checks (stablecoin -> native)."""

    def test_reference_example_succeeds_both_sides(self):
        """10.000000 -> 9.999000 USDC and 5.0 -> 5.000998 native."""
        result = classify_settlement(
            TeleportDirection.TOKEN_TO_NATIVE,
            snap("10.000000", "5.0"),
            snap("9.999000", "5.000998"),
            AMOUNT,
        )

        self.assertEqual(result.token_delta, Decimal("-0.001"))
        self.assertEqual(result.native_delta, Decimal("0.000998"))
        self.assertEqual(result.token_outcome, SettlementOutcome.SUCCESS)
        self.assertEqual(result.native_outcome, SettlementOutcome.SUCCESS)
        self.assertTrue(result.is_success)

    def test_expected_native_delta_subtracts_gas(self):
        result = classify_settlement(
            TeleportDirection.TOKEN_TO_NATIVE,
            snap("10", "5"),
            snap("9.999", "5.001"),
            AMOUNT,
            gas_cost=Decimal("0.000002"),
        )
        self.assertEqual(result.expected_native_delta, Decimal("0.000998"))
        self.assertEqual(result.gas_cost, Decimal("0.000002"))

    def test_native_not_arrived_fails_native_side(self):
        """Cross-chain delivery slower than the wait looks like a failure."""
        result = classify_settlement(
            TeleportDirection.TOKEN_TO_NATIVE,
            snap("10", "5"),
            snap("9.999", "5"),
            AMOUNT,
        )
        self.assertEqual(result.token_outcome, SettlementOutcome.SUCCESS)
        self.assertEqual(result.native_outcome, SettlementOutcome.FAILED)
        self.assertFalse(result.is_success)

    def test_token_unchanged_fails_token_side(self):
        result = classify_settlement(
            TeleportDirection.TOKEN_TO_NATIVE,
            snap("10", "5"),
            snap("10", "5.001"),
            AMOUNT,
        )
        self.assertEqual(result.token_outcome, SettlementOutcome.FAILED)
        self.assertEqual(result.native_outcome, SettlementOutcome.SUCCESS)

    def test_deviation_at_tolerance_boundary_fails(self):
        """Comparison is strict: exactly 1% off is a failure."""
        result = classify_settlement(
            TeleportDirection.TOKEN_TO_NATIVE,
            snap("10", "5"),
            snap("9.99899", "5.00101"),
            AMOUNT,
        )
        self.assertEqual(result.token_outcome, SettlementOutcome.FAILED)
        self.assertEqual(result.native_outcome, SettlementOutcome.FAILED)

    def test_deviation_just_inside_tolerance_succeeds(self):
        result = classify_settlement(
            TeleportDirection.TOKEN_TO_NATIVE,
            snap("10", "5"),
            snap("9.998991", "5.001009"),
            AMOUNT,
        )
        self.assertEqual(result.token_outcome, SettlementOutcome.SUCCESS)
        self.assertEqual(result.native_outcome, SettlementOutcome.SUCCESS)

    def test_custom_tolerance(self):
        result = classify_settlement(
            TeleportDirection.TOKEN_TO_NATIVE,
            snap("10", "5"),
            snap("9.9985", "5.0015"),
            AMOUNT,
            tolerance=Decimal("0.6"),
        )
        self.assertTrue(result.is_success)


class TestNativeToToken(unittest.TestCase):
    """Magnitude-free checks (native -> stablecoin)."""

    def test_any_increase_and_any_decrease_succeed(self):
        result = classify_settlement(
            TeleportDirection.NATIVE_TO_TOKEN,
            snap("10", "5"),
            snap("10.000001", "4.9999"),
            AMOUNT,
        )
        self.assertEqual(result.token_outcome, SettlementOutcome.SUCCESS)
        self.assertEqual(result.native_outcome, SettlementOutcome.SUCCESS)
        self.assertIsNone(result.expected_native_delta)

    def test_magnitude_is_not_checked(self):
        """A far larger increase than the amount still counts as success."""
        result = classify_settlement(
            TeleportDirection.NATIVE_TO_TOKEN,
            snap("10", "5"),
            snap("500", "1"),
            AMOUNT,
        )
        self.assertTrue(result.is_success)

    def test_unchanged_balances_fail(self):
        result = classify_settlement(
            TeleportDirection.NATIVE_TO_TOKEN,
            snap("10", "5"),
            snap("10", "5"),
            AMOUNT,
        )
        self.assertEqual(result.token_outcome, SettlementOutcome.FAILED)
        self.assertEqual(result.native_outcome, SettlementOutcome.FAILED)

    def test_native_increase_fails_native_side(self):
        result = classify_settlement(
            TeleportDirection.NATIVE_TO_TOKEN,
            snap("10", "5"),
            snap("10.001", "5.1"),
            AMOUNT,
        )
        self.assertEqual(result.token_outcome, SettlementOutcome.SUCCESS)
        self.assertEqual(result.native_outcome, SettlementOutcome.FAILED)


class TestPurity(unittest.TestCase):

    def test_same_inputs_same_result(self):
        args = (
            TeleportDirection.TOKEN_TO_NATIVE,
            snap("10", "5"),
            snap("9.999", "5.000998"),
            AMOUNT,
        )
        first = classify_settlement(*args)
        second = classify_settlement(*args)
        self.assertEqual(first, second)

    def test_to_dict_uses_strings_for_money(self):
        result = classify_settlement(
            TeleportDirection.TOKEN_TO_NATIVE,
            snap("10", "5"),
            snap("9.999", "5.000998"),
            AMOUNT,
        )
        data = result.to_dict()
        self.assertEqual(data["token_delta"], "-0.001")
        self.assertEqual(data["token_outcome"], "SUCCESS")
        self.assertTrue(data["success"])


class TestWithinTolerance(unittest.TestCase):

    def test_strict_inequality(self):
        self.assertTrue(within_tolerance(Decimal("0.000998"), AMOUNT, Decimal("0.01"), AMOUNT))
        self.assertFalse(within_tolerance(Decimal("0.00099"), AMOUNT, Decimal("0.01"), AMOUNT))


if __name__ == "__main__":
    unittest.main()
