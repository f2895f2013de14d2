from __future__ import annotations

"""Concrete rate table providers and factory.

'HTTPRateTableProvider' reads the authenticated rate endpoint configured in
settings; 'StaticRateTableProvider' serves a fixed table for offline runs and
unit tests.
"""
import logging
from typing import Dict, Optional

from pydantic import ValidationError

from convcheck.core.config import Settings, get_settings
from convcheck.core.errors import RateFetchError
from convcheck.models.rates import RateTable
from convcheck.services.http_client import HttpError, get_json
from .base import RateTableProvider

logger = logging.getLogger("convcheck.rates")

# Mid-market snapshot, EUR base; only used by the 'static' provider
_STATIC_RATES: Dict[str, float] = {
    "EUR": 1.0,
    "USD": 1.087,
    "GBP": 0.8551,
    "CAD": 1.4862,
    "AUD": 1.6479,
    "TRY": 35.12,
    "JPY": 162.45,
    "CHF": 0.9412,
}


class StaticRateTableProvider(RateTableProvider):
    def __init__(self, rates: Optional[Dict[str, float]] = None, base: Optional[str] = "EUR"):
        self._table = RateTable(base=base, rates=rates if rates is not None else _STATIC_RATES)
        self.calls = 0

    def fetch_table(self) -> RateTable:  # type: ignore[override]
        self.calls += 1
        return self._table


class HTTPRateTableProvider(RateTableProvider):
    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def _headers(self) -> Dict[str, str]:
        auth = self._settings.auth_header()
        return {"Authorization": auth} if auth else {}

    def fetch_table(self) -> RateTable:  # type: ignore[override]
        url = self._settings.api_url
        try:
            data = get_json(
                url,
                headers=self._headers(),
                timeout=self._settings.http_timeout_seconds,
            )
        except HttpError as e:
            logger.error("rate fetch failed: %s", e)
            raise RateFetchError(url, status=e.status, reason=str(e)) from e
        try:
            table = RateTable.model_validate(data)
        except ValidationError as e:
            raise RateFetchError(url, reason=f"malformed rate table: {e}") from e
        logger.debug("fetched %d rates (base=%s)", len(table.rates), table.base)
        return table


_PROVIDER_REGISTRY = {
    "static": lambda settings: StaticRateTableProvider(),
    "http": HTTPRateTableProvider,
}


def make_rate_provider(kind: str, settings: Optional[Settings] = None) -> RateTableProvider:
    factory = _PROVIDER_REGISTRY.get(kind)
    if not factory:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    return factory(settings)
