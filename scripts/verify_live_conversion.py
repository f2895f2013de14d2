import sys

from playwright.sync_api import sync_playwright

from convcheck.core.config import get_settings
from convcheck.core.logging import init_logging, scenario_context
from convcheck.models.conversion import ConversionRequest
from convcheck.pages.currency_converter import CurrencyConverterPage
from convcheck.pages.driver import PlaywrightDriver
from convcheck.services.rates.oracle import RateOracle
from convcheck.services.verifier import ConversionVerifier


def run(playwright, request: ConversionRequest, screenshot: str = "verification.png"):
    settings = get_settings()
    init_logging(debug=settings.debug)
    browser = playwright.chromium.launch(headless=True)
    context = browser.new_context()
    page = context.new_page()

    try:
        with scenario_context("live-conversion"):
            converter = CurrencyConverterPage(
                PlaywrightDriver(page, timeout_ms=settings.ui_timeout_ms), settings.page_url
            )
            converter.open()
            verifier = ConversionVerifier(converter, RateOracle.from_settings(settings))
            outcome = verifier.verify(request)
            print(outcome)
            page.screenshot(path=screenshot)
            outcome.raise_for_mismatch()
    finally:
        browser.close()


if __name__ == "__main__":
    # usage: verify_live_conversion.py [AMOUNT FROM TO]
    amount, from_code, to_code = (sys.argv[1:4] if len(sys.argv) >= 4 else ("100", "USD", "EUR"))
    with sync_playwright() as playwright:
        run(
            playwright,
            ConversionRequest(amount=float(amount), from_currency=from_code, to_currency=to_code),
        )
