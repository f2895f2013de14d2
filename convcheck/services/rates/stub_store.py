from __future__ import annotations

"""In-memory rate table behind the local stub service.

Seeded from a JSON file ({"base": "EUR", "rates": {...}} or a bare
{code: rate} mapping) or from the static snapshot. Rates can be changed at
runtime to simulate drift or a missing currency.
"""
import json
from pathlib import Path
from typing import Dict, Optional

from convcheck.models.rates import RateTable
from .providers import StaticRateTableProvider


class RateStore:
    def __init__(self, rates: Dict[str, float], base: Optional[str] = None):
        self._base = base.upper() if base else None
        self._rates: Dict[str, float] = {k.upper(): float(v) for k, v in rates.items()}

    @classmethod
    def from_file(cls, path: Path, base: Optional[str] = None) -> "RateStore":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if "rates" in data:
            return cls(data["rates"], base=data.get("base") or base)
        return cls(data, base=base)

    @classmethod
    def default(cls) -> "RateStore":
        table = StaticRateTableProvider().fetch_table()
        return cls(dict(table.rates), base=table.base)

    @property
    def base(self) -> Optional[str]:
        return self._base

    def snapshot(self) -> RateTable:
        return RateTable(base=self._base, rates=dict(self._rates))

    def set_rate(self, currency: str, rate: float) -> None:
        if rate <= 0:
            raise ValueError("rate must be positive")
        code = currency.upper()
        if code == self._base and rate != 1.0:
            raise ValueError(f"base currency {code} is fixed at 1.0")
        self._rates[code] = float(rate)

    def remove_rate(self, currency: str) -> bool:
        return self._rates.pop(currency.upper(), None) is not None
