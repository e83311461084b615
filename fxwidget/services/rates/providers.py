from __future__ import annotations

"""Concrete rate table providers and factory.

'static' serves a fixed USD-based table (offline use, tests); 'vatcomply'
fetches the live table from api.vatcomply.com.
"""
import logging
from typing import Dict, Type

from fxwidget.core.config import Settings
from fxwidget.models.rates import InvalidRateTableError, RateTable
from fxwidget.services.http_client import HttpError, get_json
from .base import RatesUnavailableError, RateTableProvider

logger = logging.getLogger("fxwidget.rates")

STATIC_AS_OF = "2024-01-02"

_STATIC_USD_RATES: Dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.92,
    "GBP": 0.79,
    "JPY": 149.50,
    "ARS": 808.50,
    "CHF": 0.86,
    "CAD": 1.35,
    "AUD": 1.52,
    "MXN": 17.05,
    "BRL": 4.97,
}


class StaticRateTableProvider(RateTableProvider):
    name = "static"

    def __init__(self, rates: Dict[str, float] | None = None, as_of: str = STATIC_AS_OF):
        self._rates = dict(rates or _STATIC_USD_RATES)
        self._as_of = as_of

    def fetch_table(self, base_currency: str = "USD") -> RateTable:
        base_currency = base_currency.upper()
        pivot = self._rates.get(base_currency)
        if not pivot:
            raise RatesUnavailableError(
                f"static table has no rate for base {base_currency}"
            )
        # Rebase: units of code per 1 base = usd_rate[code] / usd_rate[base]
        rebased = {code: rate / pivot for code, rate in self._rates.items()}
        rebased[base_currency] = 1.0
        return RateTable(base=base_currency, date=self._as_of, rates=rebased)


class VatComplyRateTableProvider(RateTableProvider):
    name = "vatcomply"

    def __init__(
        self,
        url: str = "https://api.vatcomply.com/rates",
        *,
        timeout: float = 5.0,
        retries: int = 2,
    ):
        self._url = url
        self._timeout = timeout
        self._retries = retries

    def fetch_table(self, base_currency: str = "USD") -> RateTable:
        try:
            payload = get_json(
                self._url,
                params={"base": base_currency.upper()},
                timeout=self._timeout,
                retries=self._retries,
            )
        except HttpError as e:
            raise RatesUnavailableError(f"rate fetch failed: {e}") from e
        try:
            table = RateTable.from_payload(payload)
        except InvalidRateTableError as e:
            raise RatesUnavailableError(f"upstream returned an invalid table: {e}") from e
        if table.base != base_currency.upper():
            raise RatesUnavailableError(
                f"asked for base {base_currency.upper()}, upstream answered {table.base}"
            )
        logger.info(
            "fetched rate table",
            extra={
                "fields": {
                    "provider": self.name,
                    "base": table.base,
                    "as_of": table.date,
                    "currencies": len(table.rates),
                }
            },
        )
        return table


_PROVIDER_REGISTRY: Dict[str, Type[RateTableProvider]] = {
    "static": StaticRateTableProvider,
    "vatcomply": VatComplyRateTableProvider,
}


def make_rate_provider(kind: str, settings: Settings | None = None) -> RateTableProvider:
    cls = _PROVIDER_REGISTRY.get(kind)
    if not cls:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    if cls is VatComplyRateTableProvider and settings is not None:
        return VatComplyRateTableProvider(
            str(settings.rates_api_url),
            timeout=settings.http_timeout_seconds,
            retries=settings.http_retries,
        )
    return cls()
