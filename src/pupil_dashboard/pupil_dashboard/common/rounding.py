from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 always going up (0.5 -> 1, 2.5 -> 3).

    Python's built-in round() uses banker's rounding, which would turn a lone
    half-day into zero days.
    """
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
