from __future__ import annotations

"""Conversion verification workflow.

Drives the converter page through
    consent -> amount entry -> currency selection -> convert -> result extraction
(with an optional swap) and judges the displayed number against the rate
oracle's expectation. Amounts the page refuses stop after amount entry; the
displayed error text is then the outcome.

Every failure propagates immediately; nothing here retries.
"""
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from convcheck.core.errors import ElementTimeout, ValidationRejected
from convcheck.models.constants import (
    DEFAULT_ABS_EPSILON,
    DEFAULT_REL_EPSILON,
    POPULAR_CURRENCIES,
)
from convcheck.models.conversion import (
    Amount,
    ConversionOutcome,
    ConversionRequest,
    RejectionOutcome,
)
from convcheck.pages.currency_converter import CurrencyConverterPage, conversion_url
from convcheck.services.amounts import normalize_amount, rejection_message
from convcheck.services.rates.base import SupportsFetchRate
from convcheck.services.tolerance import equivalent

logger = logging.getLogger("convcheck.verifier")


def check_dropdown_order(
    options: Sequence[str], popular: Iterable[str] = POPULAR_CURRENCIES
) -> bool:
    """Popular currencies fill the head of the list; the rest is alphabetical."""
    popular = list(popular)
    head = list(options[: len(popular)])
    if any(p not in head for p in popular):
        return False
    rest = list(options[len(popular):])
    return rest == sorted(rest)


class ConversionVerifier:
    def __init__(
        self,
        page: CurrencyConverterPage,
        oracle: SupportsFetchRate,
        abs_eps: float = DEFAULT_ABS_EPSILON,
        rel_eps: float = DEFAULT_REL_EPSILON,
    ):
        self.page = page
        self.oracle = oracle
        self.abs_eps = abs_eps
        self.rel_eps = rel_eps

    def equivalent(self, actual: float, expected: float) -> bool:
        return equivalent(actual, expected, self.abs_eps, self.rel_eps)

    def _outcome(
        self, request: ConversionRequest, actual: float, rate: float
    ) -> ConversionOutcome:
        expected = normalize_amount(request.amount) * rate
        logger.info("expected conversion: %r", expected)
        return ConversionOutcome(
            from_currency=request.from_currency,
            to_currency=request.to_currency,
            amount=request.amount,
            actual=actual,
            expected=expected,
            within_tolerance=self.equivalent(actual, expected),
        )

    # Workflow steps

    def enter_amount(self, request: ConversionRequest) -> None:
        self.page.accept_cookies()
        self.page.enter_amount(request.amount)

    def select_currencies(self, from_currency: str, to_currency: str) -> None:
        self.page.select_currency(from_currency, True)
        self.page.select_currency(to_currency, False)

    def displayed_error(self) -> Optional[str]:
        """Error text under the amount field, or None when the page shows none."""
        try:
            return self.page.amount_error_message()
        except ElementTimeout:
            return None

    def convert(self, request: ConversionRequest) -> float:
        """Run the workflow up to result extraction and return the displayed number.

        When the page is expected to refuse the amount, the workflow stops after
        amount entry and raises ValidationRejected carrying the error text the
        page actually shows.
        """
        self.enter_amount(request)
        message = rejection_message(request.amount)
        if message is not None:
            displayed = self.displayed_error()
            logger.info("amount error for %r: %r", request.amount, displayed)
            raise ValidationRejected(message, request.amount, displayed=displayed)
        self.select_currencies(request.from_currency, request.to_currency)
        self.page.click_convert()
        self.page.wait_for_result()
        return self.page.get_conversion_result()

    def read_result(self) -> float:
        self.page.wait_for_result()
        return self.page.get_conversion_result()

    # Verifications

    def verify(self, request: ConversionRequest) -> ConversionOutcome:
        rate = None
        if rejection_message(request.amount) is None:
            rate = self.oracle.fetch_rate(request.from_currency, request.to_currency)
        actual = self.convert(request)
        return self._outcome(request, actual, rate)

    def verify_swapped(self, request: ConversionRequest) -> ConversionOutcome:
        """Swap the selections of an already converted ``request`` and re-check.

        The outcome describes the reverse conversion.
        """
        reverse = request.swapped()
        self.page.swap_currencies()
        rate = self.oracle.fetch_rate(reverse.from_currency, reverse.to_currency)
        actual = self.read_result()
        return self._outcome(reverse, actual, rate)

    def verify_with_swap(
        self, request: ConversionRequest
    ) -> Tuple[ConversionOutcome, ConversionOutcome]:
        """Forward conversion, then swap, both judged against one rate snapshot."""
        forward_rate = reverse_rate = None
        if rejection_message(request.amount) is None:
            forward_rate, reverse_rate = self.oracle.fetch_rates(
                request.from_currency, request.to_currency
            )
        forward = self._outcome(request, self.convert(request), forward_rate)
        self.page.swap_currencies()
        backward = self._outcome(request.swapped(), self.read_result(), reverse_rate)
        return forward, backward

    def verify_rejection(self, request: ConversionRequest) -> RejectionOutcome:
        expected = rejection_message(request.amount)
        if expected is None:
            raise ValueError(f"amount {request.amount!r} is accepted by the page")
        self.enter_amount(request)
        displayed = self.displayed_error()
        logger.info("amount error for %r: %r", request.amount, displayed)
        return RejectionOutcome(
            amount=request.amount, expected_message=expected, displayed_message=displayed
        )

    def verify_query_string(self, request: ConversionRequest) -> ConversionOutcome:
        """Open the conversion directly through URL parameters and check the result."""
        self.page.open_conversion(
            request.amount, request.from_currency, request.to_currency
        )
        self.page.accept_cookies()
        actual = self.read_result()
        rate = self.oracle.fetch_rate(request.from_currency, request.to_currency)
        return self._outcome(request, actual, rate)

    # Page state

    def expected_url(self, amount: Amount, from_currency: str, to_currency: str) -> str:
        return conversion_url(self.page.page_url, amount, from_currency, to_currency)

    def current_url(self) -> str:
        return self.page.current_url()

    def url_matches(self, amount: Amount, from_currency: str, to_currency: str) -> bool:
        return self.current_url() == self.expected_url(
            amount, from_currency, to_currency
        )

    def currency_options(self) -> List[str]:
        self.page.accept_cookies()
        return self.page.currency_options()
