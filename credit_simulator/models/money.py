"""Monetary rounding and lenient number parsing."""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

MONEY_DECIMALS = 2


def round_money(value: float, decimals: int = MONEY_DECIMALS) -> float:
    """
    Round a monetary amount half-up to a fixed number of decimals.

    The float is read through its shortest decimal representation, so
    ``1.005`` rounds to ``1.01`` rather than falling victim to binary
    representation error. Non-finite values are returned unchanged.

    Args:
        value: Amount to round
        decimals: Number of decimal places to keep

    Returns:
        Rounded amount
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded) + 0.0  # normalise -0.0


def to_safe_number(value: Any) -> float:
    """Coerce a catalog value (number, numeric string or None) to float, 0.0 if unusable."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return 0.0
    if not parsed.is_finite():
        return 0.0
    return float(parsed)
