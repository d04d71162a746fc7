"""Rounding shared by every 0-100 score."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13).

    The built-in round() sends halves to the even neighbour, which would
    shift common ratios such as 1/8 down by a point.
    """
    return math.floor(value + 0.5)
