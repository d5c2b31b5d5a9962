"""
Currency Formatting Module.

Decimal conversion and rounding helpers shared by the billing and
rendering layers, plus Indian digit grouping for display
(last three digits, then groups of two: 12,34,567.89).

Author: ML Engineering Team
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float, str, Decimal]

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")
CURRENCY_GLYPH = "₹"


def to_decimal(value: Number) -> Decimal:
    """
    Convert a numeric value to Decimal without binary float artefacts.

    Floats go through str() so 1250.50 becomes Decimal("1250.5"), not
    Decimal("1250.499999...").

    Args:
        value: int, float, str or Decimal.

    Returns:
        Decimal value.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Number) -> Decimal:
    """Round to 2 decimal places, halves away from zero."""
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def format_amount(value: Number) -> str:
    """
    Fixed 2-decimal rendering without grouping or glyph.

    Example:
        >>> format_amount(11200)
        "11200.00"
    """
    return f"{round_money(value):.2f}"


def group_indian(integer_digits: str) -> str:
    """
    Apply Indian digit grouping to a string of digits.

    Example:
        >>> group_indian("1234567")
        "12,34,567"
    """
    if len(integer_digits) <= 3:
        return integer_digits

    last_three = integer_digits[-3:]
    others = integer_digits[:-3]

    pairs = []
    while len(others) > 2:
        pairs.insert(0, others[-2:])
        others = others[:-2]
    if others:
        pairs.insert(0, others)

    return ",".join(pairs) + "," + last_three


def format_grouped_currency(amount: Number, glyph: str = CURRENCY_GLYPH) -> str:
    """
    Format an amount with Indian grouping, a currency glyph prefix and a
    fixed 2-decimal suffix.

    Negative amounts keep the sign after the glyph.

    Args:
        amount: Amount to format.
        glyph: Currency glyph prefix.

    Returns:
        Display string.

    Example:
        >>> format_grouped_currency(1234567.89)
        "₹ 12,34,567.89"
    """
    rounded = round_money(amount)
    sign = "-" if rounded < 0 else ""
    integer_part, fraction = f"{abs(rounded):.2f}".split(".")
    return f"{glyph} {sign}{group_indian(integer_part)}.{fraction}"


__all__ = [
    'TWO_PLACES',
    'ZERO',
    'CURRENCY_GLYPH',
    'to_decimal',
    'round_money',
    'format_amount',
    'group_indian',
    'format_grouped_currency',
]
