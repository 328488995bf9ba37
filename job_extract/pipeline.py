"""Extraction coordinator.

One call walks a small state machine:

    Classifying -> AttemptingStatic (generic sources only) -> AttemptingDynamic -> Done

Static failures that mean "we could not read the page this way" escalate to
the browser; everything else ends the call. `extract` always returns an
`ExtractionResult` and never raises.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .classify import classify
from .config import ExtractorSettings
from .dynamic import DynamicExtractor
from .errors import ExtractionError
from .models import (
    ErrorKind,
    ExtractionAttempt,
    ExtractionResult,
    JobPosting,
    SourceTag,
    Strategy,
)
from .profiles import profile_for
from .static import StaticExtractor
from .utils import domain_from_url, is_valid_url

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    CLASSIFYING = "Classifying"
    ATTEMPTING_STATIC = "AttemptingStatic"
    ATTEMPTING_DYNAMIC = "AttemptingDynamic"
    DONE = "Done"


_STATE_FOR_STRATEGY = {
    Strategy.STATIC: PipelineState.ATTEMPTING_STATIC,
    Strategy.DYNAMIC: PipelineState.ATTEMPTING_DYNAMIC,
}

# Static failures that hand over to the browser instead of ending the call.
ESCALATING_ERRORS = frozenset({ErrorKind.NETWORK_FAILURE, ErrorKind.INSUFFICIENT_CONTENT})


def plan_strategies(tag: SourceTag) -> Tuple[Strategy, ...]:
    """Strategies to try for a source, in order.

    Named job boards render their postings client-side, so a plain fetch would
    only ever see an empty shell.
    """
    if tag is SourceTag.GENERIC:
        return (Strategy.STATIC, Strategy.DYNAMIC)
    return (Strategy.DYNAMIC,)


def should_escalate(attempt: ExtractionAttempt) -> bool:
    """True if a failed static attempt should fall back to the dynamic strategy."""
    return (
        attempt.strategy is Strategy.STATIC
        and not attempt.succeeded
        and attempt.error in ESCALATING_ERRORS
    )


class JobExtractor:
    """Turn one job-ad URL into a normalized posting."""

    def __init__(
        self,
        settings: Optional[ExtractorSettings] = None,
        static: Optional[StaticExtractor] = None,
        dynamic: Optional[DynamicExtractor] = None,
    ) -> None:
        self.settings = settings or ExtractorSettings()
        self._static = static or StaticExtractor(
            timeout_s=self.settings.static_timeout_s,
            user_agent=self.settings.user_agent,
        )
        self._dynamic = dynamic or DynamicExtractor(
            navigation_timeout_s=self.settings.navigation_timeout_s,
            ready_timeout_s=self.settings.ready_timeout_s,
            headless=self.settings.headless,
            browser_args=self.settings.browser_args,
            user_agent=self.settings.user_agent,
        )

    def _run(self, strategy: Strategy, url: str, tag: SourceTag) -> Tuple[ExtractionAttempt, Optional[JobPosting]]:
        extractor = self._static if strategy is Strategy.STATIC else self._dynamic
        try:
            posting = extractor.extract(url, profile_for(tag), tag)
        except ExtractionError as exc:
            logger.warning("%s extraction of %s failed (%s): %s", strategy.value, url, exc.kind.value, exc)
            return ExtractionAttempt(strategy=strategy, succeeded=False, error=exc.kind, detail=str(exc)), None
        except Exception as exc:
            logger.exception("Unexpected error during %s extraction of %s", strategy.value, url)
            return (
                ExtractionAttempt(
                    strategy=strategy,
                    succeeded=False,
                    error=ErrorKind.EXTRACTION_FAILED,
                    detail=f"{type(exc).__name__}: {exc}",
                ),
                None,
            )

        logger.info("%s extraction of %s succeeded", strategy.value, url)
        return ExtractionAttempt(strategy=strategy, succeeded=True), posting

    def extract(self, url: str) -> ExtractionResult:
        """Extract a posting from `url`. Never raises; inspect the result instead."""
        if not is_valid_url(url):
            logger.info("Rejecting invalid URL: %r", url)
            return ExtractionResult(
                url=str(url),
                error=ErrorKind.INVALID_URL,
                message=f"Not a valid http(s) URL: {url!r}",
            )

        state = PipelineState.CLASSIFYING
        tag = classify(url)
        logger.debug("%s -> %s (source=%s, domain=%s)", url, state.value, tag.value, domain_from_url(url))

        attempts: List[ExtractionAttempt] = []
        for strategy in plan_strategies(tag):
            state = _STATE_FOR_STRATEGY[strategy]
            logger.debug("%s -> %s", url, state.value)

            attempt, posting = self._run(strategy, url, tag)
            attempts.append(attempt)
            if posting is not None:
                logger.debug("%s -> %s", url, PipelineState.DONE.value)
                return ExtractionResult(url=url, source=tag, posting=posting, attempts=attempts)
            if not should_escalate(attempt):
                break

        logger.debug("%s -> %s", url, PipelineState.DONE.value)
        last = attempts[-1]
        return ExtractionResult(
            url=url,
            source=tag,
            error=ErrorKind.EXTRACTION_FAILED,
            cause=last.error if last.error is not ErrorKind.EXTRACTION_FAILED else None,
            message=f"Failed to extract job posting from {url}: {last.detail or last.error.value}",
            attempts=attempts,
        )

    def extract_many(self, urls: Iterable[str], max_workers: Optional[int] = None) -> List[ExtractionResult]:
        """Run independent `extract` calls with bounded concurrency, keeping input order."""
        urls = list(urls)
        if not urls:
            return []
        workers = max(1, min(max_workers or self.settings.max_workers, len(urls)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self.extract, urls))


def extract(url: str, settings: Optional[ExtractorSettings] = None) -> ExtractionResult:
    """Extract one posting using default (or given) settings."""
    return JobExtractor(settings=settings).extract(url)


def extract_many(
    urls: Iterable[str],
    max_workers: Optional[int] = None,
    settings: Optional[ExtractorSettings] = None,
) -> List[ExtractionResult]:
    return JobExtractor(settings=settings).extract_many(urls, max_workers=max_workers)
