from __future__ import annotations

"""UI driver capability.

The page object only sequences calls on this protocol; PlaywrightDriver is the
production adapter and unit tests substitute an in-memory fake.
"""
from contextlib import contextmanager
from typing import Iterator, List, Optional, Protocol

from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from convcheck.core.errors import ElementTimeout


class UIDriver(Protocol):
    def navigate(self, url: str) -> None: ...

    def click(self, selector: str) -> None: ...

    def fill(self, selector: str, text: str) -> None: ...

    def read_text(self, selector: str) -> str: ...

    def read_all_text(self, selector: str) -> List[str]: ...

    def wait_for_visible(self, selector: str, timeout_ms: Optional[int] = None) -> None: ...

    def is_visible(self, selector: str) -> bool: ...

    def current_url(self) -> str: ...


class PlaywrightDriver:
    """UIDriver over a Playwright sync ``Page``; selectors may be CSS or XPath."""

    def __init__(self, page: Page, timeout_ms: int = 5000):
        self.page = page
        self.timeout_ms = timeout_ms

    @contextmanager
    def _bounded(self, selector: str, timeout_ms: Optional[int]) -> Iterator[None]:
        try:
            yield
        except PlaywrightTimeoutError as e:
            raise ElementTimeout(selector, timeout_ms) from e

    def navigate(self, url: str) -> None:
        self.page.goto(url)
        self.page.wait_for_selector("body", timeout=self.timeout_ms)

    def click(self, selector: str) -> None:
        with self._bounded(selector, self.timeout_ms):
            self.page.locator(selector).first.click(timeout=self.timeout_ms)

    def fill(self, selector: str, text: str) -> None:
        with self._bounded(selector, self.timeout_ms):
            self.page.locator(selector).first.fill(text, timeout=self.timeout_ms)

    def read_text(self, selector: str) -> str:
        with self._bounded(selector, self.timeout_ms):
            return self.page.locator(selector).first.inner_text(timeout=self.timeout_ms)

    def read_all_text(self, selector: str) -> List[str]:
        return [t.strip() for t in self.page.locator(selector).all_text_contents()]

    def wait_for_visible(self, selector: str, timeout_ms: Optional[int] = None) -> None:
        timeout = timeout_ms if timeout_ms is not None else self.timeout_ms
        with self._bounded(selector, timeout):
            self.page.locator(selector).first.wait_for(state="visible", timeout=timeout)

    def is_visible(self, selector: str) -> bool:
        return self.page.locator(selector).first.is_visible()

    def current_url(self) -> str:
        return self.page.url
