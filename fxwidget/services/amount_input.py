"""Amount field handling.

The field keeps two things apart: the raw text the user typed and the last
amount that parsed as a valid non-negative number. Rules applied on each edit:

  - empty / whitespace-only text  -> amount becomes 0
  - parse failure or negative     -> previous amount kept
  - valid non-negative number     -> replaces the amount
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional


def parse_amount(raw: str) -> Optional[float]:
    """Return the parsed amount, or None when the text is not a usable number."""
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    # normalise -0.0
    return value + 0.0


@dataclass(frozen=True)
class AmountInput:
    raw: str = "1"
    amount: float = 1.0

    @classmethod
    def from_amount(cls, amount: float) -> "AmountInput":
        text = str(amount)
        if text.endswith(".0"):
            text = text[:-2]
        return cls(raw=text, amount=amount)

    def edit(self, raw: str) -> "AmountInput":
        if not raw.strip():
            return replace(self, raw=raw, amount=0.0)
        parsed = parse_amount(raw)
        if parsed is None:
            return replace(self, raw=raw)
        return AmountInput(raw=raw, amount=parsed)

    @property
    def accepted(self) -> bool:
        """True when the current text is what produced ``amount``."""
        if not self.raw.strip():
            return True
        return parse_amount(self.raw) == self.amount
