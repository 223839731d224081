"""
Small numeric helpers shared by the analytics modules.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from ..config import ROUNDING_DECIMALS


def is_finite_number(value: Any) -> bool:
    """True for real numbers that are neither NaN nor infinite. Booleans are rejected."""
    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def round_half_up(value: float, ndigits: int = ROUNDING_DECIMALS) -> float:
    """
    Round half away from zero on the shortest decimal representation of ``value``.

    ``round(2.675, 2)`` gives 2.67 because of binary representation and
    banker's rounding; this returns 2.68.
    """
    if not is_finite_number(value):
        return 0.0
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 for a zero denominator or a non-finite result."""
    if not denominator:
        return 0.0
    result = numerator / denominator
    return float(result) if is_finite_number(result) else 0.0
