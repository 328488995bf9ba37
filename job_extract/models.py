"""Data models for the extraction pipeline.

The key idea: callers get the same normalized `JobPosting` regardless of which
job board served the page or which strategy managed to read it. Failures are
values too (`ExtractionResult`), so a caller never has to guess whether a
partially-filled record is usable.

This file uses Pydantic v2.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import ErrorKind, error_for


UNKNOWN_TITLE = "Unknown Job Title"
UNKNOWN_COMPANY = "Unknown Company"


class SourceTag(str, Enum):
    """Job-board family a URL belongs to."""

    LINKEDIN = "LinkedIn"
    INDEED = "Indeed"
    GLASSDOOR = "Glassdoor"
    GENERIC = "Generic"


class Strategy(str, Enum):
    STATIC = "Static"
    DYNAMIC = "Dynamic"


class JobPosting(BaseModel):
    """A normalized job advertisement.

    Instances are frozen: a posting is built once from whichever attempt
    succeeded and handed over as a value.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(default=UNKNOWN_TITLE, min_length=1)
    company: str = Field(default=UNKNOWN_COMPANY, min_length=1)
    description: str = ""
    # Plain str rather than HttpUrl: the caller's input is echoed back untouched.
    url: str
    source: SourceTag


class ExtractionProfile(BaseModel):
    """CSS selectors used to find each field on one source's pages.

    Every marker is an ordered tuple; the first selector that yields non-empty
    text wins. `<meta>` matches are read from their `content` attribute.
    """

    model_config = ConfigDict(frozen=True)

    title_marker: Tuple[str, ...]
    company_marker: Tuple[str, ...]
    description_marker: Tuple[str, ...]


class ExtractionAttempt(BaseModel):
    """Outcome of running one strategy during a single `extract` call."""

    model_config = ConfigDict(frozen=True)

    strategy: Strategy
    succeeded: bool
    error: Optional[ErrorKind] = None
    detail: Optional[str] = Field(default=None, description="Underlying error message, if any.")


class ExtractionResult(BaseModel):
    """Terminal value of the pipeline: a posting or an error, never both."""

    model_config = ConfigDict(frozen=True)

    url: str
    source: Optional[SourceTag] = None
    posting: Optional[JobPosting] = None
    error: Optional[ErrorKind] = None
    cause: Optional[ErrorKind] = Field(
        default=None,
        description="Underlying kind wrapped by ExtractionFailed.",
    )
    message: Optional[str] = None
    attempts: List[ExtractionAttempt] = Field(default_factory=list)

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> "ExtractionResult":
        if (self.posting is None) == (self.error is None):
            raise ValueError("ExtractionResult needs exactly one of posting or error")
        return self

    @property
    def ok(self) -> bool:
        return self.posting is not None

    def failed_with(self, kind: ErrorKind) -> bool:
        """True if the call failed with `kind`, directly or as the wrapped cause."""
        return kind in (self.error, self.cause)

    def unwrap(self) -> JobPosting:
        """Return the posting or raise the `ExtractionError` matching this failure."""
        if self.posting is not None:
            return self.posting

        raise error_for(self.error, self.message or self.error.value, cause_kind=self.cause)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize into the `{success, data | error}` envelope used by UI callers."""
        if self.posting is not None:
            return {"success": True, "data": self.posting.model_dump(mode="json")}
        payload: Dict[str, Any] = {
            "success": False,
            "error": self.message or self.error.value,
            "kind": self.error.value,
            "url": self.url,
        }
        if self.cause is not None:
            payload["cause"] = self.cause.value
        return payload
