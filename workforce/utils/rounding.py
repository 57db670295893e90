"""Decimal rounding shared by forecasts, scores and rates."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 2) -> float:
    """Round to ``places`` decimals, sending exact halves away from zero.

    ``repr`` keeps the shortest decimal form of the float, so 0.125 rounds to
    0.13 rather than following its binary expansion.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))
