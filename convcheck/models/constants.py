"""Validation boundaries and messages mirrored from the converter page.

The clamp boundaries come from observed page behaviour rather than a published
contract; keep them here so a change on the site is a one-line fix.
"""

from typing import Tuple

MIN_ACCEPTED_AMOUNT: float = 0.005
MIN_DISPLAYED_AMOUNT: float = 0.01
MAX_AMOUNT: float = 1e16

MSG_AMOUNT_NOT_POSITIVE = "Please enter an amount greater than 0"
MSG_AMOUNT_INVALID = "Please enter a valid amount"

# Pinned to the top of the currency dropdown, in this order
POPULAR_CURRENCIES: Tuple[str, ...] = (
    "USD US Dollar",
    "EUR Euro",
    "GBP British Pound",
    "CAD Canadian Dollar",
    "AUD Australian Dollar",
)

DEFAULT_ABS_EPSILON: float = 1e-5
DEFAULT_REL_EPSILON: float = 1e-5
