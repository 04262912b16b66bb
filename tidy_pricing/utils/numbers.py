"""Numeric coercion and currency formatting helpers"""

import math
from typing import Any


def coerce_float(value: Any, default: float = 0.0) -> float:
    """
    Parse a number permissively.

    Anything that is not a finite, non-negative number (None, "", "abc",
    NaN, negative values) becomes ``default`` instead of raising.
    """
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number) or number < 0:
        return default
    return number


def coerce_int(value: Any, default: int = 0) -> int:
    """Parse a whole count permissively (floats are truncated)"""
    return int(coerce_float(value, float(default)))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up"""
    return int(math.floor(value + 0.5))


def dollars_to_cents(amount: float) -> int:
    return round_half_up(amount * 100)


def clamp_non_negative(value: float) -> float:
    """Zero out negative or NaN amounts before display"""
    if math.isnan(value) or value < 0:
        return 0.0
    return value


def format_currency(value: float, clamp: bool = True) -> str:
    """Format an amount to exactly 2 decimals, e.g. 100 -> "100.00" """
    if clamp:
        value = clamp_non_negative(value)
    formatted = f"{value:.2f}"
    return "0.00" if formatted == "-0.00" else formatted
