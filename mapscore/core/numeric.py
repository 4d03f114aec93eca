"""Numeric helpers shared by the percentile and projection engines.

Everything here is total: no helper raises for NaN or infinite input, which
lets the engines promise deterministic output for any number a caller sends.
"""

from __future__ import annotations

import math
from typing import TypeVar

__all__ = [
    "clamp",
    "finite_or",
    "round_half_up",
    "round_to",
    "as_float",
]


NumericT = TypeVar("NumericT", int, float)


def clamp(value: NumericT, min_value: NumericT, max_value: NumericT) -> NumericT:
    """Clamp ``value`` into ``[min_value, max_value]``.

    Example:
        >>> clamp(150, 0, 100)
        100
        >>> clamp(-5, 0, 100)
        0
    """
    if min_value > max_value:
        raise ValueError(f"min_value ({min_value}) must be <= max_value ({max_value})")
    return max(min_value, min(value, max_value))


def finite_or(value: float, default: float) -> float:
    """Return ``value`` unless it is NaN, in which case return ``default``.

    Infinities are kept; callers clamp them into their own bounds.
    """
    if isinstance(value, float) and math.isnan(value):
        return default
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    Matches the rounding the charts have always displayed (``2.5 -> 3``,
    ``-2.5 -> -2``), unlike Python's banker's rounding.

    Example:
        >>> round_half_up(70.5)
        71
        >>> round_half_up(70.49)
        70
    """
    return int(math.floor(value + 0.5))


def round_to(value: float, decimals: int) -> float:
    """Round half-up to ``decimals`` places."""
    factor = 10 ** decimals
    return round_half_up(value * factor) / factor


def as_float(value: float) -> float:
    """``float(value)``, with integers too large for a float mapped to +/-inf.

    Example:
        >>> as_float(10 ** 400)
        inf
    """
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf
