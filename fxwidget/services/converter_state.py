from __future__ import annotations

"""Widget state and its transitions.

Every user action produces a new ConverterState; the displayed values are then
recomputed from scratch with ``display()``. Nothing is cached between steps.
"""
from dataclasses import dataclass, field, replace

from fxwidget.models.conversion import ConversionDisplay, ConversionRequest, ConversionResult
from fxwidget.models.rates import RateTable
from fxwidget.services.amount_input import AmountInput
from fxwidget.services.rates.conversion import convert, describe


@dataclass(frozen=True)
class ConverterState:
    amount_input: AmountInput = field(default_factory=AmountInput)
    from_code: str = "USD"
    to_code: str = "EUR"

    @classmethod
    def initial(cls, amount: float, from_code: str, to_code: str) -> "ConverterState":
        return cls(
            amount_input=AmountInput.from_amount(amount),
            from_code=from_code.upper(),
            to_code=to_code.upper(),
        )

    @property
    def amount(self) -> float:
        return self.amount_input.amount

    def with_amount_text(self, raw: str) -> "ConverterState":
        return replace(self, amount_input=self.amount_input.edit(raw))

    def with_from(self, code: str) -> "ConverterState":
        return replace(self, from_code=code.upper())

    def with_to(self, code: str) -> "ConverterState":
        return replace(self, to_code=code.upper())

    def swapped(self) -> "ConverterState":
        # single replace: both codes change in one new value
        return replace(self, from_code=self.to_code, to_code=self.from_code)

    def request(self) -> ConversionRequest:
        return ConversionRequest(
            amount=self.amount, from_code=self.from_code, to_code=self.to_code
        )

    def result(self, table: RateTable) -> ConversionResult:
        return convert(table, self.request())

    def display(self, table: RateTable) -> ConversionDisplay:
        return describe(table, self.request())
