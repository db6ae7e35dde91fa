# backend/finance_tracker/utils/money.py
"""
Decimal helpers for monetary values.

Calculations keep full Decimal precision internally. Rounding happens only
at output boundaries (response schemas, composition breakdowns) so that
rounding error does not compound across positions.

Usage:
    from finance_tracker.utils.money import to_decimal, round_money, round_percent

    value = to_decimal("1234.5678")
    round_money(value)         # Decimal("1234.57")
    round_percent(Decimal("12.345"), places=1)  # Decimal("12.3")
"""

from decimal import Decimal, ROUND_HALF_UP

ZERO = Decimal("0")
HUNDRED = Decimal("100")

MONEY_QUANTUM = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """
    Convert a numeric value to Decimal without binary float artifacts.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not
    Decimal("0.1000000000000000055511151231257827").

    Raises:
        TypeError: If value is not numeric (bool included)
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a valid monetary value")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, str)):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")


def round_money(value: Decimal) -> Decimal:
    """Round a monetary amount to cents (half-up)."""
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def round_percent(value: Decimal, places: int = 2) -> Decimal:
    """Round a percentage to the given number of decimal places (half-up)."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole × 100, or 0 when whole is not positive."""
    if whole <= ZERO:
        return ZERO
    return part / whole * HUNDRED
