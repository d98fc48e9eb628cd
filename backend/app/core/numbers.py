"""
Rounding helpers.

Reported values round half away from zero (2.5 -> 3), never with the
built-in round(), which rounds half to even.
"""
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_int(value: float) -> int:
    return int(round_half_up(value))
