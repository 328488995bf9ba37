"""Exceptions raised inside the pipeline.

Extractors raise these; `JobExtractor.extract` converts them into an
`ExtractionResult`, so none of them escape the public `extract` call.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Type


class ErrorKind(str, Enum):
    """Failure taxonomy.

    `NetworkFailure` and `InsufficientContent` only ever trigger the fallback
    to the dynamic strategy; callers see `InvalidUrl` or `ExtractionFailed`.
    """

    INVALID_URL = "InvalidUrl"
    NETWORK_FAILURE = "NetworkFailure"
    INSUFFICIENT_CONTENT = "InsufficientContent"
    BROWSER_LAUNCH_FAILURE = "BrowserLaunchFailure"
    NAVIGATION_TIMEOUT = "NavigationTimeout"
    EXTRACTION_FAILED = "ExtractionFailed"


class ExtractionError(Exception):
    """Base exception for extraction failures."""

    kind: ErrorKind = ErrorKind.EXTRACTION_FAILED


class InvalidUrlError(ExtractionError):
    """Raised when the input is not an absolute http(s) URL."""

    kind = ErrorKind.INVALID_URL


class NetworkFailureError(ExtractionError):
    """Raised when the static HTTP request fails or returns a non-2xx status."""

    kind = ErrorKind.NETWORK_FAILURE


class InsufficientContentError(ExtractionError):
    """Raised when a fetched document has no readable text at all."""

    kind = ErrorKind.INSUFFICIENT_CONTENT


class BrowserLaunchError(ExtractionError):
    """Raised when the headless browser process cannot be started."""

    kind = ErrorKind.BROWSER_LAUNCH_FAILURE


class NavigationTimeoutError(ExtractionError):
    """Raised when a page does not load or never reaches a ready state in time."""

    kind = ErrorKind.NAVIGATION_TIMEOUT


class ExtractionFailedError(ExtractionError):
    """Raised when every applicable strategy failed."""

    kind = ErrorKind.EXTRACTION_FAILED

    def __init__(self, message: str, cause_kind: Optional[ErrorKind] = None) -> None:
        super().__init__(message)
        self.cause_kind = cause_kind


_ERRORS_BY_KIND: Dict[ErrorKind, Type[ExtractionError]] = {
    cls.kind: cls
    for cls in (
        InvalidUrlError,
        NetworkFailureError,
        InsufficientContentError,
        BrowserLaunchError,
        NavigationTimeoutError,
    )
}


def error_for(kind: ErrorKind, message: str, cause_kind: Optional[ErrorKind] = None) -> ExtractionError:
    """Build the exception matching `kind`."""
    if kind is ErrorKind.EXTRACTION_FAILED:
        return ExtractionFailedError(message, cause_kind=cause_kind)
    return _ERRORS_BY_KIND[kind](message)
