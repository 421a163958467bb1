"""Money helpers: Decimal coercion and pt-BR currency formatting."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Coerce a numeric value to Decimal.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion. ``None`` and empty strings are zero.
    """
    if isinstance(value, Decimal):
        return value
    if value is None or value == "":
        return ZERO
    return Decimal(str(value))


def quantize(value: Any) -> Decimal:
    """Round to cents with HALF_UP rounding."""
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(value: Any, symbol: str = "R$") -> str:
    """Format a value as Brazilian currency, e.g. ``R$ 1.234,56``.

    Negative values are prefixed with a minus sign: ``-R$ 10,00``.
    """
    amount = quantize(value)
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,.2f}"
    # swap US separators for pt-BR ones
    localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{symbol} {localized}"
