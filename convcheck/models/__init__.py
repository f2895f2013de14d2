"""Value types shared by the rate oracle and the conversion verifier."""

from .constants import (
    MIN_ACCEPTED_AMOUNT,
    MIN_DISPLAYED_AMOUNT,
    MAX_AMOUNT,
    MSG_AMOUNT_NOT_POSITIVE,
    MSG_AMOUNT_INVALID,
    POPULAR_CURRENCIES,
)  # re-export
from .conversion import (
    Amount,
    ConversionRequest,
    ConversionOutcome,
    RejectionOutcome,
)
from .rates import RateTable

__all__ = [
    "MIN_ACCEPTED_AMOUNT",
    "MIN_DISPLAYED_AMOUNT",
    "MAX_AMOUNT",
    "MSG_AMOUNT_NOT_POSITIVE",
    "MSG_AMOUNT_INVALID",
    "POPULAR_CURRENCIES",
    "Amount",
    "ConversionRequest",
    "ConversionOutcome",
    "RejectionOutcome",
    "RateTable",
]
