import re
from typing import Dict, List, Optional
from urllib.parse import parse_qs, urlsplit

import pytest

from convcheck.core.config import Settings
from convcheck.core.errors import ElementTimeout
from convcheck.pages.currency_converter import CurrencyConverterPage
from convcheck.services.rates.oracle import RateOracle
from convcheck.services.rates.providers import StaticRateTableProvider
from convcheck.services.verifier import ConversionVerifier

PAGE_URL = "https://converter.test/currencyconverter"

RATES: Dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.92,
    "GBP": 0.79,
    "TRY": 32.2,
    "CAD": 1.36,
    "AUD": 1.52,
}

OPTIONS: List[str] = [
    "USD US Dollar",
    "EUR Euro",
    "GBP British Pound",
    "CAD Canadian Dollar",
    "AUD Australian Dollar",
    "AED Emirati Dirham",
    "JPY Japanese Yen",
    "TRY Turkish Lira",
]

_OPTION_CODE = re.compile(r"contains\(normalize-space\(\), '([A-Z]+)'\)")


class FakeConverterDriver:
    """In-memory stand-in for the converter page behind the UIDriver protocol.

    Applies the page's amount rules on its own and renders results with eight
    decimals and thousands separators, like the live site.
    """

    P = CurrencyConverterPage

    def __init__(
        self,
        rates: Optional[Dict[str, float]] = None,
        page_url: str = PAGE_URL,
        consent_prompt: bool = True,
        drift: float = 0.0,
        options: Optional[List[str]] = None,
        result_text: Optional[str] = None,
    ):
        self.rates = dict(rates or RATES)
        self.page_url = page_url
        self.consent_visible = consent_prompt
        self.drift = drift
        self.options = list(options if options is not None else OPTIONS)
        self.result_text = result_text
        self.url = ""
        self.amount_text = ""
        self.from_code = "USD"
        self.to_code = "EUR"
        self.open_slot: Optional[str] = None
        self.converted = False
        self.calls: List[tuple] = []

    # page behaviour

    def _amount_error(self) -> Optional[str]:
        try:
            value = float(self.amount_text)
        except ValueError:
            return "Please enter a valid amount"
        if value != value or value in (float("inf"), float("-inf")):
            return "Please enter a valid amount"
        if value < 0.005:
            return "Please enter an amount greater than 0"
        return None

    def _effective_amount(self) -> float:
        value = float(self.amount_text)
        return min(max(value, 0.01), 1e16)

    def _refresh_url(self) -> None:
        if self.converted:
            self.url = (
                f"{self.page_url}/convert/?Amount={self.amount_text}"
                f"&From={self.from_code}&To={self.to_code}"
            )

    def _rendered_result(self) -> str:
        if self.result_text is not None:
            return self.result_text
        rate = self.rates[self.to_code] / self.rates[self.from_code]
        value = self._effective_amount() * rate * (1 + self.drift)
        return f"{value:,.8f} {self.to_code}"

    # UIDriver protocol

    def navigate(self, url: str) -> None:
        self.calls.append(("navigate", url))
        self.url = url
        query = parse_qs(urlsplit(url).query)
        if {"Amount", "From", "To"} <= set(query):
            self.amount_text = query["Amount"][0]
            self.from_code = query["From"][0]
            self.to_code = query["To"][0]
            self.converted = True

    def click(self, selector: str) -> None:
        self.calls.append(("click", selector))
        if selector == self.P.ACCEPT_COOKIES_BUTTON and self.consent_visible:
            self.consent_visible = False
        elif selector == self.P.FROM_DROPDOWN:
            self.open_slot = "from"
        elif selector == self.P.TO_DROPDOWN:
            self.open_slot = "to"
        elif _OPTION_CODE.search(selector) and self.open_slot:
            code = _OPTION_CODE.search(selector).group(1)
            if self.open_slot == "from":
                self.from_code = code
            else:
                self.to_code = code
            self.open_slot = None
            self._refresh_url()
        elif selector == self.P.CONVERT_BUTTON:
            if self._amount_error() is None:
                self.converted = True
                self._refresh_url()
        elif selector == self.P.SWAP_BUTTON:
            self.from_code, self.to_code = self.to_code, self.from_code
            self._refresh_url()
        else:
            raise ElementTimeout(selector, 5000)

    def fill(self, selector: str, text: str) -> None:
        self.calls.append(("fill", selector, text))
        assert selector == self.P.AMOUNT_INPUT
        self.amount_text = text

    def is_visible(self, selector: str) -> bool:
        if selector == self.P.ACCEPT_COOKIES_BUTTON:
            return self.consent_visible
        if selector == self.P.RESULT_TEXT:
            return self.converted
        if selector == self.P.AMOUNT_ERROR:
            return bool(self.amount_text) and self._amount_error() is not None
        if selector == self.P.FROM_OPTIONS:
            return self.open_slot == "from"
        return False

    def wait_for_visible(self, selector: str, timeout_ms: Optional[int] = None) -> None:
        self.calls.append(("wait", selector))
        if not self.is_visible(selector):
            raise ElementTimeout(selector, timeout_ms)

    def read_text(self, selector: str) -> str:
        self.calls.append(("read", selector))
        if selector == self.P.RESULT_TEXT and self.converted:
            return self._rendered_result()
        if selector == self.P.AMOUNT_ERROR and self.is_visible(selector):
            return self._amount_error()
        raise ElementTimeout(selector, 5000)

    def read_all_text(self, selector: str) -> List[str]:
        if selector == self.P.FROM_OPTIONS and self.open_slot == "from":
            return list(self.options)
        return []

    def current_url(self) -> str:
        return self.url

    def clicked(self, selector: str) -> int:
        return sum(1 for c in self.calls if c[0] == "click" and c[1] == selector)


HARNESS_ENV = (
    "PAGE_URL",
    "UI_TIMEOUT_MS",
    "API_URL",
    "API_CREDENTIAL",
    "API_AUTH_SCHEME",
    "HTTP_TIMEOUT_SECONDS",
    "RATE_PROVIDER",
    "STUB_BASE_CURRENCY",
    "STUB_RATES_FILE",
    "DEBUG",
)


@pytest.fixture(autouse=True)
def isolated_env(request, monkeypatch):
    # live scenarios read their configuration from the environment
    if "e2e" in request.node.path.parts:
        return
    for name in HARNESS_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    s = Settings(
        _env_file=None,
        page_url=PAGE_URL + "/",
        api_url="http://rates.test/latest",
        api_credential="user:secret",
        rate_provider="static",
    )
    s.init_post_load()
    return s


@pytest.fixture
def provider():
    return StaticRateTableProvider(RATES, base="USD")


@pytest.fixture
def oracle(provider):
    return RateOracle(provider)


@pytest.fixture
def driver():
    return FakeConverterDriver()


@pytest.fixture
def converter_page(driver):
    page = CurrencyConverterPage(driver, PAGE_URL)
    page.open()
    return page


@pytest.fixture
def verifier(converter_page, oracle):
    return ConversionVerifier(converter_page, oracle)
