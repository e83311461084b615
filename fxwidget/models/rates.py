from __future__ import annotations

import math
import re
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

CODE_PATTERN = re.compile(r"^[A-Z]{2,5}$")


class InvalidRateTableError(ValueError):
    """Raised when upstream data cannot be turned into a usable RateTable."""


class RateTable(BaseModel):
    """Base-relative rates: 1 unit of ``base`` = ``rates[code]`` units of code.

    Validated once on ingestion and read-only afterwards: the model is frozen
    and ``rates`` is a ``MappingProxyType``. Zero, negative and non-finite
    values are rejected here so the conversion engine never divides by zero.
    If the upstream omits the base currency it is added with rate 1.
    """

    model_config = ConfigDict(frozen=True)

    base: str = "USD"
    date: Optional[str] = Field(None, description="As-of date reported upstream")
    rates: Mapping[str, float]

    @model_validator(mode="before")
    @classmethod
    def normalise_codes(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        base = data.get("base", "USD")
        rates = data.get("rates")
        if not isinstance(base, str) or not isinstance(rates, Mapping):
            return data
        base = base.strip().upper()
        merged: Dict[str, Any] = {}
        for code, value in rates.items():
            if not isinstance(code, str):
                raise ValueError(f"invalid currency code {code!r}")
            key = code.strip().upper()
            if key in merged:
                raise ValueError(f"duplicate currency code '{key}' (differs only by case)")
            merged[key] = value
        merged.setdefault(base, 1.0)
        return {**data, "base": base, "rates": merged}

    @field_validator("base")
    @classmethod
    def valid_base(cls, v: str) -> str:
        if not CODE_PATTERN.match(v):
            raise ValueError(f"invalid base currency code '{v}'")
        return v

    @field_validator("rates")
    @classmethod
    def valid_rates(cls, v: Mapping[str, float], info: ValidationInfo) -> Mapping[str, float]:
        cleaned: Dict[str, float] = {}
        for code, value in v.items():
            if not CODE_PATTERN.match(code):
                raise ValueError(f"invalid currency code '{code}'")
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"rate for {code} must be a positive number")
            cleaned[code] = float(value)
        base = info.data.get("base")
        if base is not None and cleaned.get(base, 1.0) != 1.0:
            raise ValueError(f"base currency {base} must have rate 1, got {cleaned[base]}")
        return MappingProxyType(cleaned)

    @classmethod
    def from_payload(cls, payload: dict) -> "RateTable":
        """Build a table from an upstream JSON body ``{base, date, rates}``."""
        try:
            return cls(
                base=payload.get("base") or "USD",
                date=payload.get("date"),
                rates=payload.get("rates") or {},
            )
        except (ValidationError, AttributeError, TypeError) as e:
            raise InvalidRateTableError(str(e)) from e

    def get(self, code: str) -> Optional[float]:
        return self.rates.get(code.upper())

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.upper() in self.rates

    def currencies(self) -> List[str]:
        return sorted(self.rates)
