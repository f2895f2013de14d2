"""Amount policy mirrored from the converter page.

Centralized so expectation math, typed input and the query-string contract all
agree on how an amount is interpreted and rendered.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Optional

from convcheck.core.errors import ValidationRejected
from convcheck.models.constants import (
    MAX_AMOUNT,
    MIN_ACCEPTED_AMOUNT,
    MIN_DISPLAYED_AMOUNT,
    MSG_AMOUNT_INVALID,
    MSG_AMOUNT_NOT_POSITIVE,
)
from convcheck.models.conversion import Amount


def parse_amount(amount: Amount) -> float:
    if isinstance(amount, str):
        try:
            value = float(amount.strip())
        except ValueError:
            raise ValidationRejected(MSG_AMOUNT_INVALID, amount) from None
    else:
        value = float(amount)
    if not math.isfinite(value):
        raise ValidationRejected(MSG_AMOUNT_INVALID, amount)
    return value


def normalize_amount(amount: Amount) -> float:
    """Return the amount the page actually converts.

    Raises ValidationRejected carrying the page's error text when the amount is
    refused outright.
    """
    value = parse_amount(amount)
    if value < MIN_ACCEPTED_AMOUNT:
        raise ValidationRejected(MSG_AMOUNT_NOT_POSITIVE, amount)
    if value < MIN_DISPLAYED_AMOUNT:
        return MIN_DISPLAYED_AMOUNT
    if value >= MAX_AMOUNT:
        return MAX_AMOUNT
    return value


def rejection_message(amount: Amount) -> Optional[str]:
    try:
        normalize_amount(amount)
    except ValidationRejected as e:
        return e.message
    return None


def format_amount(amount: Amount) -> str:
    """Text typed into the amount field and used as the Amount query parameter.

    Finite numbers from 1e-6 up to 1e21 render in plain decimal notation, as
    the page's own number-to-text conversion does.
    """
    if isinstance(amount, str):
        return amount
    value = float(amount)
    if not math.isfinite(value) or abs(value) >= 1e21:
        return repr(value)
    if value.is_integer():
        return str(int(value))
    if abs(value) >= 1e-6:
        return format(Decimal(repr(value)), "f")
    return repr(value)
