"""Fixed-decimal rounding shared by the analytics output."""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

# Enough digits for the integer part of any finite float plus the decimals
_CONTEXT = Context(prec=400)


def round_half_up(value: float, digits: int) -> float:
    """Round ``value`` to ``digits`` decimals, ties away from zero.

    Works on the exact binary value of the float, so ``1.005`` stays ``1.0``
    while ``0.125`` becomes ``0.13``. Built-in ``round`` would give ``0.12``.
    Infinities and NaN are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_CONTEXT))
