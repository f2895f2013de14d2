from __future__ import annotations

import logging
from typing import Optional, Tuple

from convcheck.core.config import Settings, get_settings
from convcheck.models.conversion import Amount, validate_currency_code
from convcheck.services.amounts import normalize_amount
from .base import RateTableProvider
from .providers import make_rate_provider

"""Authoritative rate lookup, independent of the page under test.

Responsibilities:
    - Fetch one rate table per call (no caching; every scenario proves its own
      expectation).
    - Derive cross-rates as table[to] / table[from] from that single snapshot.
    - Turn missing or unusable rates into RateLookupError instead of NaN.
"""

logger = logging.getLogger("convcheck.oracle")


class RateOracle:
    def __init__(self, provider: RateTableProvider):
        self._provider = provider

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RateOracle":
        settings = settings or get_settings()
        return cls(make_rate_provider(settings.rate_provider, settings))

    def fetch_rate(self, from_currency: str, to_currency: str) -> float:
        from_code = validate_currency_code(from_currency)
        to_code = validate_currency_code(to_currency)
        rate = self._provider.fetch_table().cross_rate(from_code, to_code)
        logger.info("expected rate %s->%s: %r", from_code, to_code, rate)
        return rate

    def fetch_rates(self, from_currency: str, to_currency: str) -> Tuple[float, float]:
        """Forward and reverse rate from the same snapshot."""
        from_code = validate_currency_code(from_currency)
        to_code = validate_currency_code(to_currency)
        table = self._provider.fetch_table()
        forward = table.cross_rate(from_code, to_code)
        reverse = table.cross_rate(to_code, from_code)
        logger.info(
            "expected rates %s<->%s: %r / %r", from_code, to_code, forward, reverse
        )
        return forward, reverse

    def expected_conversion(
        self, amount: Amount, from_currency: str, to_currency: str
    ) -> float:
        return normalize_amount(amount) * self.fetch_rate(from_currency, to_currency)
