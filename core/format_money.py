# PATH: core/format_money.py
"""
Safe money formatting utilities.

No float money: values are str, int or Decimal. Formatting never raises on
valid numeric input.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Union

from core.constants import NATIVE_DECIMALS, TOKEN_DECIMALS

MoneyLike = Union[str, Decimal, int, None]


def format_money(value: MoneyLike, decimals: int = TOKEN_DECIMALS) -> str:
    """
    Format a money value to a fixed number of decimal places.

    Handles:
    - str: parse as Decimal, format
    - Decimal: format directly
    - int: convert to Decimal, format
    - None or empty string: zero

    Uses ROUND_HALF_UP.

    Example:
        >>> format_money("9.999")
        '9.999000'
        >>> format_money(Decimal("0.000998"), decimals=18)
        '0.000998000000000000'
        >>> format_money(None)
        '0.000000'
    """
    zero = f"0.{'0' * decimals}" if decimals > 0 else "0"
    if value is None:
        return zero

    try:
        if isinstance(value, str):
            if not value.strip():
                return zero
            dec_value = Decimal(value)
        elif isinstance(value, bool):
            dec_value = Decimal(1 if value else 0)
        else:
            dec_value = Decimal(str(value))

        with localcontext() as ctx:
            ctx.prec = 100
            quantize_str = "0." + "0" * decimals if decimals > 0 else "0"
            rounded = dec_value.quantize(Decimal(quantize_str), rounding=ROUND_HALF_UP)

        return f"{rounded:.{decimals}f}"

    except (InvalidOperation, ValueError, TypeError):
        return zero


def format_delta(value: MoneyLike, decimals: int = NATIVE_DECIMALS) -> str:
    """Format a balance change with an explicit sign ("+0.001000")."""
    text = format_money(value, decimals)
    if Decimal(text) == 0:
        return text.lstrip("-")
    return text if text.startswith("-") else "+" + text
