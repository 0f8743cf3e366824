"""
core.formatting
Deterministic display strings for money and rates.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def _fixed(x: float, places: int) -> str:
    # Decimal(float) is the exact binary value, so ties round like JS toFixed().
    q = Decimal(1).scaleb(-places)
    return str(Decimal(x).quantize(q, rounding=ROUND_HALF_UP))


def format_currency(amount: float) -> str:
    """Compact money: $950, $12.3K, $1.5M (sign kept)."""
    a = abs(float(amount))
    if a >= 1_000_000:
        body = f"${_fixed(a / 1_000_000, 1)}M"
    elif a >= 1000:
        body = f"${_fixed(a / 1000, 1)}K"
    else:
        body = f"${int(_fixed(a, 0)):,}"
    return f"-{body}" if amount < 0 else body


def format_currency_full(amount: float) -> str:
    """Whole dollars with separators: $12,345 / -$1,200."""
    whole = int(_fixed(abs(float(amount)), 0))
    body = f"${whole:,}"
    return f"-{body}" if amount < 0 and whole != 0 else body


def format_percentage(decimal: float) -> str:
    """0.055 -> '5.5%'."""
    return f"{_fixed(float(decimal) * 100, 1)}%"
