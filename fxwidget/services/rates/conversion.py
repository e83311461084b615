from __future__ import annotations

import logging
from typing import Mapping, Union

from fxwidget.models.conversion import ConversionDisplay, ConversionRequest, ConversionResult
from fxwidget.models.rates import RateTable
from fxwidget.services.money import format_precise, format_value

"""Cross-rate conversion engine.

Pure functions over a base-relative rate table. A currency missing from the
table (or mapped to a falsy rate) resolves to 1.0, i.e. it is treated as if it
were the base currency. This keeps the widget usable when a selection and the
table disagree; each fallback is logged at WARNING so it stays visible.
"""

logger = logging.getLogger("fxwidget.conversion")

Rates = Union[RateTable, Mapping[str, float]]

FALLBACK_RATE = 1.0


def _lookup(rates: Rates, code: str) -> float:
    value = rates.get(code)
    if not value:
        logger.warning(
            "no rate for %s, falling back to %s", code, FALLBACK_RATE,
            extra={"fields": {"currency": code}},
        )
        return FALLBACK_RATE
    return value


def calculate_cross_rate(rates: Rates, from_code: str, to_code: str) -> float:
    """Units of ``to_code`` per 1 unit of ``from_code``."""
    rate_from = _lookup(rates, from_code)
    rate_to = _lookup(rates, to_code)
    return rate_to / rate_from


def convert_amount(amount: float, rates: Rates, from_code: str, to_code: str) -> float:
    return amount * calculate_cross_rate(rates, from_code, to_code)


def inverse_rate(cross_rate: float) -> float:
    return 1 / cross_rate


def convert(rates: Rates, request: ConversionRequest) -> ConversionResult:
    cross = calculate_cross_rate(rates, request.from_code, request.to_code)
    return ConversionResult(
        cross_rate=cross,
        converted_amount=request.amount * cross,
        inverse_rate=inverse_rate(cross),
    )


def describe(rates: Rates, request: ConversionRequest) -> ConversionDisplay:
    """Format one conversion for display.

    The headline echoes the input with 2 grouped decimals; everything computed
    (result and both directional rates) uses 6 ungrouped decimals.
    """
    result = convert(rates, request)
    cross = format_precise(result.cross_rate)
    inverse = format_precise(result.inverse_rate)
    return ConversionDisplay(
        from_code=request.from_code,
        to_code=request.to_code,
        amount=request.amount,
        headline_amount=format_value(request.amount),
        converted_amount=format_precise(result.converted_amount),
        cross_rate=cross,
        inverse_rate=inverse,
        direct_rate_line=f"1 {request.from_code} = {cross} {request.to_code}",
        inverse_rate_line=f"1 {request.to_code} = {inverse} {request.from_code}",
        as_of=rates.date if isinstance(rates, RateTable) else None,
    )
