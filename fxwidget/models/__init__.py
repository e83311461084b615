"""Pydantic domain models for the currency converter widget."""

from .rates import RateTable, InvalidRateTableError  # re-export
from .conversion import ConversionRequest, ConversionResult, ConversionDisplay

__all__ = [
    "RateTable",
    "InvalidRateTableError",
    "ConversionRequest",
    "ConversionResult",
    "ConversionDisplay",
]
