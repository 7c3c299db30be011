"""
Numeric helpers shared by the scorers.
"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def percentage(part: int, whole: int) -> float:
    """Unrounded percentage of part in whole; 0.0 when whole is 0."""
    if whole == 0:
        return 0.0
    return part / whole * 100
