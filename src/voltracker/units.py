"""Unit normalization for volatility figures and loose numeric parsing."""

from __future__ import annotations

import math
import numbers
from typing import Any

from voltracker.config import UnitConvention


def to_number(value: Any) -> float | None:
    """Parse an upstream value as a float.

    Accepts real numbers (numpy scalars included) and numeric strings.
    Returns None for anything else (including booleans and blank strings). Non-finite values are returned
    as-is so callers can tell "absent" from "malformed"; integers too large
    for a float become an infinity of the same sign.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return float(text)
        except ValueError:
            return None
    return None


def sanitize_volatility(raw: float | None) -> float:
    """Clamp negative, non-finite or missing figures to ``0.0``."""
    value = to_number(raw)
    if value is None or not math.isfinite(value) or value < 0:
        return 0.0
    return value


def normalize_volatility(
    raw: float | None,
    tie_break: UnitConvention = UnitConvention.DECIMAL,
) -> float:
    """Canonicalize a volatility figure to a decimal fraction.

    Values above 1 are read as percentages and divided by 100; values at or
    below 1 are already fractions. A value of exactly 1 follows
    ``tie_break``. Corrupt input (negative, NaN, inf) becomes 0 so it cannot
    leak into pricing math.

    >>> normalize_volatility(18.0)
    0.18
    >>> normalize_volatility(0.18)
    0.18
    """
    value = sanitize_volatility(raw)
    if value > 1:
        return value / 100
    if value == 1 and tie_break is UnitConvention.PERCENT:
        return 0.01
    return value
