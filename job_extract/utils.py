"""Utility helpers shared across the pipeline."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlparse


_INLINE_WS_RE = re.compile(r"[ \t\r\f\v\u00a0]+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")


def clean_text(text: str) -> str:
    """Collapse runs of whitespace while keeping paragraph breaks."""
    if not text:
        return ""
    t = _INLINE_WS_RE.sub(" ", text)
    t = "\n".join(line.strip() for line in t.split("\n"))
    t = _BLANK_LINES_RE.sub("\n\n", t)
    return t.strip()


def is_valid_url(url: Any) -> bool:
    """True for absolute http(s) URLs with a host."""
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.hostname)


def domain_from_url(url: str) -> str:
    """Return the hostname without a leading 'www.', or 'unknown'."""
    try:
        host = urlparse(url).hostname
    except (TypeError, ValueError):
        return "unknown"
    if not host:
        return "unknown"
    return host[4:] if host.startswith("www.") else host


def single_line(text: str) -> str:
    """Collapse all whitespace, newlines included, into single spaces."""
    return " ".join((text or "").split())
