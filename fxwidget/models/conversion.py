from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ConversionRequest(BaseModel):
    amount: float = Field(..., ge=0, allow_inf_nan=False)
    from_code: str
    to_code: str

    @field_validator("from_code", "to_code")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.strip().upper()


@dataclass(frozen=True)
class ConversionResult:
    cross_rate: float
    converted_amount: float
    inverse_rate: float


class ConversionDisplay(BaseModel):
    """Literal values shown by the widget for one request."""

    from_code: str
    to_code: str
    amount: float
    headline_amount: str = Field(..., description="Input amount, 2 decimals, grouped")
    converted_amount: str = Field(..., description="Result, 6 decimals")
    cross_rate: str
    inverse_rate: str
    direct_rate_line: str
    inverse_rate_line: str
    as_of: Optional[str] = None
