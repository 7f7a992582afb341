# PATH: core/math.py
"""
Math utilities for the teleport demo.

Safe unit conversions (no float money). Display amounts are Decimal,
on-chain amounts are int base units.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from core.exceptions import ValidationError


def to_base_units(amount: Union[str, int, Decimal], decimals: int) -> int:
    """
    Scale a display amount to integer base units.

    Raises ValidationError when the amount is negative, not a number, or
    carries more fractional digits than the asset supports.

    Example:
        >>> to_base_units("0.001", 6)
        1000
    """
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(
            f"Invalid amount: {amount!r}",
            details={"amount": str(amount)},
        ) from e

    if not value.is_finite() or value < 0:
        raise ValidationError(
            f"Amount must be a non-negative number: {amount}",
            details={"amount": str(amount)},
        )

    with localcontext() as ctx:
        ctx.prec = 100
        scaled = value.scaleb(decimals)

    if scaled != scaled.to_integral_value():
        raise ValidationError(
            f"Amount {amount} has more than {decimals} decimal places",
            details={"amount": str(amount), "decimals": decimals},
        )
    return int(scaled)


def from_base_units(value: int, decimals: int) -> Decimal:
    """
    Scale integer base units to a display Decimal.

    Example:
        >>> from_base_units(1000, 6)
        Decimal('0.001000')
    """
    with localcontext() as ctx:
        ctx.prec = 100
        return Decimal(int(value)).scaleb(-decimals)


def gas_cost_wei(gas_used: int | None, effective_gas_price: int | None) -> int:
    """Gas cost in wei; zero if either component is unavailable."""
    if not gas_used or not effective_gas_price:
        return 0
    return gas_used * effective_gas_price
