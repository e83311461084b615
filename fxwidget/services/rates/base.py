from __future__ import annotations

"""Rate table provider abstraction.

A provider returns the complete base-relative table in one call; the engine
never asks for individual rates over the network.
"""
from abc import ABC, abstractmethod

from fxwidget.models.rates import RateTable


class RatesUnavailableError(RuntimeError):
    """The rate table could not be obtained from the configured provider."""


class RateTableProvider(ABC):
    name: str = "abstract"

    @abstractmethod
    def fetch_table(self, base_currency: str = "USD") -> RateTable:
        """Return units of each currency per 1 unit of base_currency."""
        raise NotImplementedError
