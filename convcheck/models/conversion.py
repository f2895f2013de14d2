from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from convcheck.core.errors import ToleranceMismatch

Amount = Union[float, str]


def validate_currency_code(v: str) -> str:
    code = v.strip().upper()
    if not code or not code.isalpha():
        raise ValueError(f"invalid currency code {v!r}")
    return code


class ConversionRequest(BaseModel):
    """What a scenario asks the page to convert.

    ``amount`` may be text so scenarios can type non-numeric input.
    """

    model_config = ConfigDict(frozen=True)

    amount: Amount
    from_currency: str
    to_currency: str

    @field_validator("from_currency", "to_currency")
    @classmethod
    def valid_code(cls, v: str) -> str:
        return validate_currency_code(v)

    def swapped(self) -> "ConversionRequest":
        return ConversionRequest(
            amount=self.amount,
            from_currency=self.to_currency,
            to_currency=self.from_currency,
        )


@dataclass(frozen=True)
class ConversionOutcome:
    from_currency: str
    to_currency: str
    amount: Amount
    actual: float
    expected: float
    within_tolerance: bool

    def raise_for_mismatch(self) -> "ConversionOutcome":
        if not self.within_tolerance:
            raise ToleranceMismatch(
                self.actual,
                self.expected,
                context=f"{self.amount} {self.from_currency}->{self.to_currency}",
            )
        return self


@dataclass(frozen=True)
class RejectionOutcome:
    amount: Amount
    expected_message: str
    displayed_message: Optional[str]

    @property
    def matches(self) -> bool:
        return self.displayed_message == self.expected_message
