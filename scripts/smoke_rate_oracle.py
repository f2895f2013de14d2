"""Smoke script for the rate oracle.

Fetches cross-rates for a few pairs from the configured provider (RATE_PROVIDER,
API_URL, API_CREDENTIAL) and shows forward * reverse for each, which should sit
at 1.0 when both directions come from one snapshot.

NOTE: This is a lightweight diagnostic and not a formal test.
"""

import json
import sys

from convcheck.core.config import get_settings
from convcheck.core.logging import init_logging
from convcheck.services.rates.oracle import RateOracle

PAIRS = (("USD", "EUR"), ("TRY", "EUR"), ("TRY", "GBP"))


def run(pairs=PAIRS):
    settings = get_settings()
    init_logging(debug=settings.debug)
    oracle = RateOracle.from_settings(settings)
    out = {}
    for a, b in pairs:
        forward, reverse = oracle.fetch_rates(a, b)
        out[f"{a}/{b}"] = {
            "forward": forward,
            "reverse": reverse,
            "product": forward * reverse,
        }
    print(json.dumps(out, indent=2))


if __name__ == "__main__":
    args = sys.argv[1:]
    if args:
        run([tuple(p.upper().split("/")) for p in args])
    else:
        run()
