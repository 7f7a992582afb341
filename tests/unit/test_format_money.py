# PATH: tests/unit/test_format_money.py
"""
Unit tests for format_money module.
"""

import unittest
from decimal import Decimal

from core.format_money import (
    format_delta,
    format_money,
)


class TestFormatMoney(unittest.TestCase):
    """Tests for format_money function."""

    def test_format_string_input(self):
        self.assertEqual(format_money("9.999"), "9.999000")
        self.assertEqual(format_money("0"), "0.000000")

    def test_format_decimal_input(self):
        self.assertEqual(format_money(Decimal("123.456789")), "123.456789")

    def test_format_int_input(self):
        self.assertEqual(format_money(100), "100.000000")

    def test_format_none_and_empty(self):
        self.assertEqual(format_money(None), "0.000000")
        self.assertEqual(format_money(""), "0.000000")
        self.assertEqual(format_money("   "), "0.000000")

    def test_format_invalid_string(self):
        self.assertEqual(format_money("abc"), "0.000000")

    def test_rounding_half_up(self):
        self.assertEqual(format_money("0.0000005"), "0.000001")

    def test_zero_decimals(self):
        self.assertEqual(format_money("12.5", decimals=0), "13")


class TestFormatDelta(unittest.TestCase):

    def test_positive_has_plus(self):
        self.assertEqual(format_delta(Decimal("0.001"), 6), "+0.001000")

    def test_negative_keeps_minus(self):
        self.assertEqual(format_delta(Decimal("-0.001"), 6), "-0.001000")

    def test_zero_unsigned(self):
        self.assertEqual(format_delta(Decimal("0"), 6), "0.000000")
        self.assertEqual(format_delta(Decimal("-0.0000001"), 6), "0.000000")


if __name__ == "__main__":
    unittest.main()
