from __future__ import annotations

import logging
from typing import Optional

from fxwidget.core.config import Settings
from fxwidget.models.rates import RateTable
from .base import RateTableProvider
from .providers import make_rate_provider

"""Session-scoped rate table holder.

The table is fetched from the configured provider on first use and then served
unchanged for the lifetime of the application. There is no expiry or refresh;
a failed fetch is not remembered, so the next request tries again.
"""

logger = logging.getLogger("fxwidget.rates")


class RateTableService:
    def __init__(self, provider: RateTableProvider, base_currency: str = "USD"):
        self._provider = provider
        self._base = base_currency.upper()
        self._table: Optional[RateTable] = None

    @property
    def provider_name(self) -> str:
        return self._provider.name

    @property
    def loaded(self) -> bool:
        return self._table is not None

    def get_table(self) -> RateTable:
        if self._table is None:
            logger.debug("loading rate table from %s", self._provider.name)
            # RatesUnavailableError propagates to the web layer (503)
            self._table = self._provider.fetch_table(self._base)
        return self._table


def build_rate_table_service(settings: Settings) -> RateTableService:
    provider = make_rate_provider(settings.rate_provider, settings)
    return RateTableService(provider, settings.base_currency)
