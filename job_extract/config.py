"""Runtime settings for the extractors.

Every knob has a sensible default and can be overridden either by passing it
explicitly or through `JOB_EXTRACT_*` environment variables.
"""

from __future__ import annotations

import os
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

ENV_PREFIX = "JOB_EXTRACT_"


def _env(name: str) -> Optional[str]:
    val = os.getenv(ENV_PREFIX + name)
    if val is None or not val.strip():
        return None
    return val.strip()


class ExtractorSettings(BaseModel):
    """Timeouts, browser options and the default worker cap."""

    model_config = ConfigDict(frozen=True)

    static_timeout_s: float = Field(default=10.0, gt=0)
    navigation_timeout_s: float = Field(default=30.0, gt=0)
    ready_timeout_s: float = Field(default=10.0, gt=0)
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    browser_args: Tuple[str, ...] = ("--no-sandbox", "--disable-setuid-sandbox")
    # Each dynamic attempt is a full browser process; keep this small.
    max_workers: int = Field(default=3, ge=1)

    @classmethod
    def from_env(cls) -> "ExtractorSettings":
        """Build settings from `JOB_EXTRACT_*` variables, falling back to defaults."""
        overrides = {}
        for field in ("static_timeout_s", "navigation_timeout_s", "ready_timeout_s"):
            val = _env(field.upper())
            if val is not None:
                overrides[field] = float(val)

        headless = _env("HEADLESS")
        if headless is not None:
            overrides["headless"] = headless.lower() not in ("0", "false", "no", "off")

        user_agent = _env("USER_AGENT")
        if user_agent is not None:
            overrides["user_agent"] = user_agent

        max_workers = _env("MAX_WORKERS")
        if max_workers is not None:
            overrides["max_workers"] = int(max_workers)

        return cls(**overrides)
