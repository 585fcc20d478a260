"""Monetary helpers.

All bill arithmetic runs on ``decimal.Decimal`` and is rounded to whole
cents, so cumulative sums never drift the way binary floats do.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

MoneyLike = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Currency symbols for display
CURRENCY_SYMBOLS = {
    "GBP": "£",
    "USD": "$",
    "EUR": "€",
    "INR": "₹",
}


def to_money(value: MoneyLike) -> Decimal:
    """Convert a number to Decimal.

    Floats go through ``str`` so 0.1 becomes Decimal("0.1") rather than
    its binary expansion.

    Raises:
        TypeError: If the value is not a finite number (including strings
            that do not parse, such as "abc" or "NaN").
    """
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool):
        raise TypeError("Booleans are not monetary amounts")
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, (str, float)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise TypeError(f"Cannot convert {value!r} to a monetary amount") from None
    else:
        raise TypeError(f"Cannot convert {type(value).__name__} to a monetary amount")

    if not amount.is_finite():
        raise TypeError(f"Monetary amounts must be finite, got {value!r}")
    return amount


def quantize_money(value: MoneyLike) -> Decimal:
    """Round to whole cents (half-up)."""
    return to_money(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(value: MoneyLike, symbol: str = "$", decimals: int = 2) -> str:
    """Format a value as currency string.

    Args:
        value: The monetary value.
        symbol: Currency symbol (default $).
        decimals: Decimal places (default 2).

    Returns:
        Formatted currency string (e.g., "$1,234.50").
    """
    amount = to_money(value)
    if decimals == 0:
        return f"{symbol}{amount:,.0f}"
    return f"{symbol}{amount:,.{decimals}f}"
