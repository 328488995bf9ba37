"""Map an input URL to the job board it belongs to."""

from __future__ import annotations

from typing import Any, Tuple

from .models import SourceTag


# Checked in order; the first substring found in the lower-cased URL wins.
KNOWN_SOURCES: Tuple[Tuple[str, SourceTag], ...] = (
    ("linkedin.com", SourceTag.LINKEDIN),
    ("indeed.com", SourceTag.INDEED),
    ("glassdoor.com", SourceTag.GLASSDOOR),
)


def classify(url: Any) -> SourceTag:
    """Return the source tag for `url`.

    Total: any input, including non-strings and malformed URLs, yields a tag.
    """
    try:
        lowered = str(url or "").lower()
    except Exception:  # broken __str__
        return SourceTag.GENERIC

    for needle, tag in KNOWN_SOURCES:
        if needle in lowered:
            return tag
    return SourceTag.GENERIC
