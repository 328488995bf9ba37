"""Static extraction: one plain HTTP GET, parsed without running page scripts.

Cheap and fast, but blind to content that sites inject client-side. The
coordinator therefore only uses it for generic sources and escalates to the
browser on failure.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

import httpx
from bs4 import BeautifulSoup, Tag

from .config import DEFAULT_USER_AGENT
from .errors import InsufficientContentError, NetworkFailureError
from .models import UNKNOWN_COMPANY, UNKNOWN_TITLE, ExtractionProfile, JobPosting, SourceTag
from .utils import clean_text, single_line

logger = logging.getLogger(__name__)

# Never part of the readable text of a page.
NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]

# Elements that start a new line when a page is read as text.
BLOCK_TAGS = [
    "p", "div", "br", "li", "ul", "ol", "dl", "dt", "dd", "tr", "table",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "section", "article", "header", "footer", "blockquote", "pre",
]


def _marker_text(el: Tag, multiline: bool) -> str:
    if el.name == "meta":
        text = el.get("content") or ""
    else:
        text = el.get_text()
    return clean_text(text) if multiline else single_line(text)


def first_marker_text(soup: BeautifulSoup, selectors: Iterable[str], multiline: bool = False) -> Optional[str]:
    """Return the text of the first selector that matches with non-empty text."""
    for selector in selectors:
        el = soup.select_one(selector)
        if el is None:
            continue
        text = _marker_text(el, multiline)
        if text:
            return text
    return None


def parse_posting(html: Union[str, bytes], url: str, profile: ExtractionProfile, source: SourceTag) -> JobPosting:
    """Build a JobPosting from raw HTML using `profile`'s markers.

    Missing markers degrade to placeholders; a description that matches no
    marker falls back to the whole body text. Only a document with no text at
    all raises InsufficientContentError.
    """
    soup = BeautifulSoup(html, "lxml")
    for tag in soup.find_all(NON_CONTENT_TAGS):
        tag.decompose()
    for block in soup.find_all(BLOCK_TAGS):
        block.insert_before("\n")
        block.insert_after("\n")

    description = first_marker_text(soup, profile.description_marker, multiline=True)
    if description is None:
        root = soup.body or soup
        description = clean_text(root.get_text())
        if not description:
            raise InsufficientContentError(f"No readable content at {url}")
        logger.debug("No description marker matched for %s; using body text", url)

    return JobPosting(
        title=first_marker_text(soup, profile.title_marker) or UNKNOWN_TITLE,
        company=first_marker_text(soup, profile.company_marker) or UNKNOWN_COMPANY,
        description=description,
        url=url,
        source=source,
    )


class StaticExtractor:
    """Fetch a page over HTTP and extract a posting from its raw HTML."""

    def __init__(
        self,
        timeout_s: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._timeout = timeout_s
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }
        self._transport = transport

    def fetch(self, url: str) -> Union[str, bytes]:
        """GET `url` once; any transport error or non-2xx status is a NetworkFailureError.

        Returns decoded text when the response declares a charset, otherwise raw
        bytes so the parser can sniff a <meta charset>.
        """
        try:
            with httpx.Client(
                timeout=self._timeout,
                follow_redirects=True,
                headers=self._headers,
                transport=self._transport,
            ) as client:
                resp = client.get(url)
                resp.raise_for_status()
                if resp.charset_encoding:
                    return resp.text
                return resp.content
        except httpx.HTTPStatusError as exc:
            raise NetworkFailureError(f"HTTP {exc.response.status_code} for {url}") from exc
        except httpx.HTTPError as exc:
            raise NetworkFailureError(f"Request to {url} failed: {exc}") from exc

    def extract(self, url: str, profile: ExtractionProfile, source: SourceTag) -> JobPosting:
        html = self.fetch(url)
        return parse_posting(html, url, profile, source)
