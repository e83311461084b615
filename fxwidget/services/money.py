"""Money / rounding helpers.

Centralized so the page, the JSON API and the engine use identical rounding
semantics. Floats are rounded through their shortest decimal representation
(``str(value)``) with ROUND_HALF_UP, so 99.995 becomes "100.00" rather than
the binary-float artefact "99.99".
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP, localcontext

_CENTS = Decimal("0.01")
_MICROS = Decimal("0.000001")


def _quantize(value: float, step: Decimal) -> Decimal:
    d = Decimal(str(value))
    with localcontext() as ctx:
        # quantize needs every integer digit plus the fractional ones
        ctx.prec = max(ctx.prec, d.adjusted() + 1 - step.as_tuple().exponent + 1)
        q = d.quantize(step, rounding=ROUND_HALF_UP)
    if q.is_zero():
        # drop the sign of -0.00
        q = abs(q)
    return q


def format_value(value: float) -> str:
    """Two decimals with thousands grouping: 1234567.891 -> '1,234,567.89'."""
    return f"{_quantize(value, _CENTS):,.2f}"


def format_precise(value: float) -> str:
    """Six decimals, no grouping: 1/0.85 -> '1.176471'."""
    return f"{_quantize(value, _MICROS):.6f}"
