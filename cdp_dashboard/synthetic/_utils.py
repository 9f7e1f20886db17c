"""Shared numeric helpers for the synthetic generators and aggregators."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded towards +inf.

    The built-in ``round`` uses banker's rounding, which would make
    ``round(22.5) == 22``; dashboard figures always round halves up.

    Example:
        >>> round_half_up(22.5)
        23
    """
    return math.floor(value + 0.5)


def round_to_tenth(value: float) -> float:
    """Round to one decimal place, halves rounded up."""
    return math.floor(value * 10 + 0.5) / 10


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator``, or 0.0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return max(lower, min(upper, value))
