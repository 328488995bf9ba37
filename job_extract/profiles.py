"""Per-source extraction profiles.

Site-specific knowledge lives here as data: supporting a new job board means
adding a `SourceTag` and one entry below, not a new code path in the
extractors. The first selector of each named profile is the long-standing one;
later entries cover newer markup served by the same site.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .models import ExtractionProfile, SourceTag


_PROFILES = {
    SourceTag.LINKEDIN: ExtractionProfile(
        title_marker=(
            ".job-details-jobs-unified-top-card__job-title",
            ".top-card-layout__title",
        ),
        company_marker=(
            ".job-details-jobs-unified-top-card__company-name",
            ".topcard__org-name-link",
        ),
        description_marker=(
            ".jobs-description__content",
            ".show-more-less-html__markup",
        ),
    ),
    SourceTag.INDEED: ExtractionProfile(
        title_marker=(
            ".jobsearch-JobInfoHeader-title",
            'h1[data-testid="jobsearch-JobInfoHeader-title"]',
        ),
        company_marker=(
            ".jobsearch-InlineCompanyRating-companyHeader",
            '[data-testid="inlineHeader-companyName"]',
        ),
        description_marker=("#jobDescriptionText",),
    ),
    SourceTag.GLASSDOOR: ExtractionProfile(
        title_marker=(".job-title", '[data-test="job-title"]'),
        company_marker=(".employer-name", '[data-test="employer-name"]'),
        description_marker=(
            ".jobDescriptionContent",
            '[class*="JobDetails_jobDescription"]',
        ),
    ),
    # Best-effort markers for unknown sites.
    SourceTag.GENERIC: ExtractionProfile(
        title_marker=("h1", "title"),
        company_marker=('meta[property="og:site_name"]', 'meta[name="author"]'),
        description_marker=("main", "article", 'div[role="main"]'),
    ),
}

PROFILES: Mapping[SourceTag, ExtractionProfile] = MappingProxyType(_PROFILES)


def profile_for(tag: SourceTag) -> ExtractionProfile:
    """Return the profile for `tag`. Always the same object for the same tag."""
    return PROFILES[tag]
