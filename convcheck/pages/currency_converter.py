from __future__ import annotations

import logging
import math
import re
from typing import List, Optional

from convcheck.core.errors import ElementTimeout, ResultParseError
from convcheck.models.conversion import Amount
from convcheck.services.amounts import format_amount
from .driver import UIDriver

logger = logging.getLogger("convcheck.page")

# Everything except digits, decimal point and minus sign is display decoration
_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
_LEADING_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_result(text: str) -> float:
    """Reduce displayed result text to a number.

    Like a lenient float parse, only the leading numeric part of the cleaned
    text is used ("92.01-" reads as 92.01).
    """
    cleaned = _NON_NUMERIC.sub("", text)
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        raise ResultParseError(text)
    value = float(match.group(0))
    if not math.isfinite(value):
        raise ResultParseError(text)
    return value


def conversion_url(page_url: str, amount: Amount, from_currency: str, to_currency: str) -> str:
    return (
        f"{page_url.rstrip('/')}/convert/"
        f"?Amount={format_amount(amount)}&From={from_currency}&To={to_currency}"
    )


class CurrencyConverterPage:
    """Page object for the mid-market currency converter."""

    AMOUNT_INPUT = "#amount"
    FROM_DROPDOWN = "input[aria-describedby='midmarketFromCurrency-current-selection']"
    TO_DROPDOWN = "input[aria-describedby='midmarketToCurrency-current-selection']"
    FROM_OPTIONS = "#midmarketFromCurrency-listbox li[role='option']"
    CURRENCY_OPTION = "//div[@class='flex' and contains(normalize-space(), '{code}')]"
    CONVERT_BUTTON = '//button[normalize-space()="Convert"]'
    RESULT_TEXT = ".sc-63d8b7e3-1.bMdPIi"
    ACCEPT_COOKIES_BUTTON = "//button[normalize-space()='Accept']"
    SWAP_BUTTON = "button[aria-label='Swap currencies']"
    AMOUNT_ERROR = ".sc-52d95371-0.fkpUOL.relative.top-1"

    def __init__(self, driver: UIDriver, page_url: str, consent_timeout_ms: int = 2000):
        self.driver = driver
        self.page_url = page_url.rstrip("/")
        self.consent_timeout_ms = consent_timeout_ms

    def open(self, url: Optional[str] = None) -> None:
        self.driver.navigate(url or self.page_url)

    def open_conversion(self, amount: Amount, from_currency: str, to_currency: str) -> None:
        self.open(conversion_url(self.page_url, amount, from_currency, to_currency))

    def accept_cookies(self) -> None:
        # Safe to call when the prompt never appeared or was already dismissed
        try:
            self.driver.wait_for_visible(
                self.ACCEPT_COOKIES_BUTTON, timeout_ms=self.consent_timeout_ms
            )
        except ElementTimeout:
            logger.debug("no consent prompt shown")
            return
        self.driver.click(self.ACCEPT_COOKIES_BUTTON)

    def enter_amount(self, amount: Amount) -> None:
        self.driver.fill(self.AMOUNT_INPUT, "")
        self.driver.fill(self.AMOUNT_INPUT, format_amount(amount))

    def select_currency(self, currency_code: str, is_from_currency: bool) -> None:
        dropdown = self.FROM_DROPDOWN if is_from_currency else self.TO_DROPDOWN
        self.driver.click(dropdown)
        self.driver.click(self.CURRENCY_OPTION.format(code=currency_code))

    def click_convert(self) -> None:
        self.driver.click(self.CONVERT_BUTTON)

    def swap_currencies(self) -> None:
        self.driver.click(self.SWAP_BUTTON)

    def wait_for_result(self, timeout_ms: Optional[int] = None) -> None:
        self.driver.wait_for_visible(self.RESULT_TEXT, timeout_ms=timeout_ms)

    def get_conversion_result(self) -> float:
        text = self.driver.read_text(self.RESULT_TEXT)
        value = parse_result(text)
        logger.info("parsed result: %r", value)
        return value

    def amount_error_message(self) -> str:
        self.driver.wait_for_visible(self.AMOUNT_ERROR)
        return self.driver.read_text(self.AMOUNT_ERROR).strip()

    def has_amount_error(self) -> bool:
        return self.driver.is_visible(self.AMOUNT_ERROR)

    def currency_options(self) -> List[str]:
        self.driver.click(self.FROM_DROPDOWN)
        self.driver.wait_for_visible(self.FROM_OPTIONS)
        return self.driver.read_all_text(self.FROM_OPTIONS)

    def current_url(self) -> str:
        return self.driver.current_url()
