from __future__ import annotations

"""Rate provider abstraction.

A provider returns one complete rate table per call; the oracle derives
cross-rates from that single snapshot.
"""
from abc import ABC, abstractmethod
from typing import Protocol, Tuple

from convcheck.models.rates import RateTable


class RateTableProvider(ABC):
    @abstractmethod
    def fetch_table(self) -> RateTable:
        """Return a fresh snapshot of rates keyed by currency code."""
        raise NotImplementedError


class SupportsFetchRate(Protocol):
    def fetch_rate(self, from_currency: str, to_currency: str) -> float: ...

    def fetch_rates(self, from_currency: str, to_currency: str) -> Tuple[float, float]: ...
