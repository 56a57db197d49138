"""Rounding helpers shared by the conversion and matching engines"""

import math
from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round like a cook would expect: 2.345 -> 2.35, 0.5 -> 1.

    Python's round() uses banker's rounding and works on the binary value,
    so the decimal repr is rounded instead.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
