from __future__ import annotations

import math
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from convcheck.core.errors import RateLookupError


class RateTable(BaseModel):
    """One snapshot of rates, all relative to the same (possibly implicit) base."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    base: Optional[str] = None
    rates: Dict[str, float]

    @field_validator("rates")
    @classmethod
    def upper_codes(cls, v: Dict[str, float]) -> Dict[str, float]:
        return {code.upper(): rate for code, rate in v.items()}

    def rate_for(self, currency: str) -> float:
        code = currency.upper()
        if code not in self.rates:
            raise RateLookupError(code)
        rate = self.rates[code]
        if not math.isfinite(rate) or rate <= 0:
            raise RateLookupError(code, f"unusable rate {rate!r}")
        return rate

    def cross_rate(self, from_currency: str, to_currency: str) -> float:
        """Units of ``to_currency`` bought by one unit of ``from_currency``."""
        return self.rate_for(to_currency) / self.rate_for(from_currency)
