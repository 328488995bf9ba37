"""Job posting extraction package.

The package is structured around a single entry point, `extract(url)`:
- `classify.py` maps a URL to a known job board (or `Generic`).
- `profiles.py` holds the per-board selectors as data.
- `static.py` and `dynamic.py` are the two ways of reading a page.
- `pipeline.py` picks the cheapest strategy that can work and falls back.
- `models.py` defines the stable schema callers receive.
"""

from .classify import classify
from .config import ExtractorSettings
from .errors import ExtractionError
from .models import (
    ErrorKind,
    ExtractionAttempt,
    ExtractionProfile,
    ExtractionResult,
    JobPosting,
    SourceTag,
    Strategy,
)
from .pipeline import JobExtractor, extract, extract_many
from .profiles import profile_for

__all__ = [
    "ErrorKind",
    "ExtractionAttempt",
    "ExtractionError",
    "ExtractionProfile",
    "ExtractionResult",
    "ExtractorSettings",
    "JobExtractor",
    "JobPosting",
    "SourceTag",
    "Strategy",
    "classify",
    "extract",
    "extract_many",
    "profile_for",
]
