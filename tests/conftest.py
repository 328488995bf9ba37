"""
Shared fixtures for the extraction tests.

No test here touches the network or launches a browser:
- HTTP goes through httpx.MockTransport
- Playwright is replaced by MagicMock objects patched over
  job_extract.dynamic.sync_playwright
"""

from types import SimpleNamespace
from typing import Callable, Dict, Optional
from unittest.mock import MagicMock, patch

import httpx
import pytest


def html_transport(body: str, status_code: int = 200) -> httpx.MockTransport:
    """Transport that answers every request with the same HTML."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, html=body)

    return httpx.MockTransport(handler)


def marker_values(values: Dict[str, Optional[str]], body: Optional[str] = None) -> Callable:
    """page.evaluate side effect: look up the first selector of each marker.

    A call without selectors is the body-text read and returns `body`.
    """

    def evaluate(script, selectors=None):
        if selectors is None:
            return body
        for selector in selectors:
            if selector in values:
                return values[selector]
        return None

    return evaluate


@pytest.fixture
def fake_playwright():
    """
    Patch sync_playwright with a chain of mocks.

    sync_playwright().start() -> playwright
    playwright.chromium.launch() -> browser
    browser.new_context().new_page() -> page
    """
    with patch("job_extract.dynamic.sync_playwright") as sync_playwright:
        playwright = MagicMock(name="playwright")
        sync_playwright.return_value.start.return_value = playwright

        browser = playwright.chromium.launch.return_value
        page = browser.new_context.return_value.new_page.return_value
        page.goto.return_value = MagicMock(ok=True, status=200)
        page.evaluate.return_value = None

        yield SimpleNamespace(
            sync_playwright=sync_playwright,
            playwright=playwright,
            browser=browser,
            page=page,
        )
