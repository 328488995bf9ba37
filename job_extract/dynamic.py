"""Dynamic extraction with a headless Chromium driven by Playwright.

Used for sources that only populate their DOM after running scripts. Every
call launches its own browser process inside `browser_session()`, which closes
it on every exit path (success, timeout, or an exception mid-navigation), so a
failed extraction never leaves a browser behind.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from playwright.sync_api import Browser, Page
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from .config import DEFAULT_USER_AGENT
from .errors import BrowserLaunchError, NavigationTimeoutError
from .models import UNKNOWN_COMPANY, UNKNOWN_TITLE, ExtractionProfile, JobPosting, SourceTag
from .utils import clean_text, single_line

logger = logging.getLogger(__name__)

# Document-ready marker awaited after the network settles.
READY_SELECTOR = "body"

# Runs in page context. Returns the first non-empty value among `selectors`;
# <meta> elements contribute their content attribute.
MARKER_SCRIPT = """
(selectors) => {
  for (const selector of selectors) {
    let el = null;
    try {
      el = document.querySelector(selector);
    } catch (e) {
      continue;
    }
    if (!el) continue;
    const value = el.tagName === 'META' ? el.getAttribute('content') : el.innerText || el.textContent;
    if (value && value.trim()) return value.trim();
  }
  return null;
}
"""

# Fallback description: rendered body text. innerText skips script and style content.
BODY_TEXT_SCRIPT = "() => (document.body ? document.body.innerText : null)"


class DynamicExtractor:
    """Render a page in a real browser and read markers from the live DOM."""

    def __init__(
        self,
        navigation_timeout_s: float = 30.0,
        ready_timeout_s: float = 10.0,
        headless: bool = True,
        browser_args: Sequence[str] = ("--no-sandbox", "--disable-setuid-sandbox"),
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._navigation_timeout_ms = navigation_timeout_s * 1000
        self._ready_timeout_ms = ready_timeout_s * 1000
        self._headless = headless
        self._browser_args = list(browser_args)
        self._user_agent = user_agent

    @contextmanager
    def browser_session(self) -> Iterator[Browser]:
        """Launch one Chromium process and guarantee it is closed afterwards."""
        try:
            playwright = sync_playwright().start()
        except (PlaywrightError, OSError) as exc:
            raise BrowserLaunchError(f"Could not start Playwright: {exc}") from exc

        try:
            try:
                browser = playwright.chromium.launch(headless=self._headless, args=self._browser_args)
            except PlaywrightError as exc:
                raise BrowserLaunchError(f"Could not launch Chromium: {exc}") from exc

            logger.debug("Browser launched")
            try:
                yield browser
            finally:
                try:
                    browser.close()
                except PlaywrightError as exc:
                    # The driver is stopped below, which kills the process anyway.
                    logger.warning("Browser close failed: %s", exc)
                logger.debug("Browser closed")
        finally:
            playwright.stop()

    def _open_page(self, browser: Browser) -> Page:
        try:
            context = browser.new_context(user_agent=self._user_agent)
            page = context.new_page()
        except PlaywrightError as exc:
            raise BrowserLaunchError(f"Could not open a browser page: {exc}") from exc
        page.set_default_navigation_timeout(self._navigation_timeout_ms)
        return page

    def _navigate(self, page: Page, url: str) -> None:
        """Load `url`, wait for the network to go quiet, then for the ready marker."""
        try:
            response = page.goto(url, wait_until="networkidle")
            page.wait_for_selector(READY_SELECTOR, state="attached", timeout=self._ready_timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise NavigationTimeoutError(f"Timed out loading {url}") from exc
        except PlaywrightError as exc:
            # DNS failures, aborted loads, crashed tabs: the page never became ready.
            raise NavigationTimeoutError(f"Page {url} never became ready: {exc}") from exc

        if response is not None and not response.ok:
            logger.warning("Dynamic load of %s returned HTTP %s; reading DOM anyway", url, response.status)

    def _read_marker(self, page: Page, selectors: Sequence[str], field: str, multiline: bool = False) -> Optional[str]:
        try:
            value = page.evaluate(MARKER_SCRIPT, list(selectors))
        except PlaywrightError as exc:
            logger.warning("Could not evaluate %s marker: %s", field, exc)
            return None
        if not isinstance(value, str):
            return None
        text = clean_text(value) if multiline else single_line(value)
        return text or None

    def _read_body_text(self, page: Page) -> Optional[str]:
        try:
            value = page.evaluate(BODY_TEXT_SCRIPT)
        except PlaywrightError as exc:
            logger.warning("Could not read body text: %s", exc)
            return None
        if not isinstance(value, str):
            return None
        return clean_text(value) or None

    def extract(self, url: str, profile: ExtractionProfile, source: SourceTag) -> JobPosting:
        with self.browser_session() as browser:
            page = self._open_page(browser)
            self._navigate(page, url)

            title = self._read_marker(page, profile.title_marker, "title")
            company = self._read_marker(page, profile.company_marker, "company")
            description = self._read_marker(page, profile.description_marker, "description", multiline=True)
            if description is None:
                logger.debug("No description marker matched for %s; using body text", url)
                description = self._read_body_text(page)

        return JobPosting(
            title=title or UNKNOWN_TITLE,
            company=company or UNKNOWN_COMPANY,
            description=description or "",
            url=url,
            source=source,
        )
