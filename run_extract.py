"""CLI entry point.

This script extracts job postings from one or more URLs and writes a JSON list
of result envelopes.

Examples:
    python run_extract.py https://example.com/careers/123
    python run_extract.py URL1 URL2 --out postings.json --workers 2
    python run_extract.py https://www.linkedin.com/jobs/view/4081234567 --verbose

Each entry is either {"success": true, "data": {...}} or
{"success": false, "error": "...", "kind": "..."}.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from job_extract import ExtractorSettings, JobExtractor


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Extract normalized job postings from job-ad URLs.")
    p.add_argument("urls", nargs="+", help="One or more job advertisement URLs.")
    p.add_argument("--out", type=str, default=None, help="Output JSON file path (default: stdout).")
    p.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Max concurrent extractions (each may run a browser). Defaults to JOB_EXTRACT_MAX_WORKERS or 3.",
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Log pipeline progress to stderr.")
    return p.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    extractor = JobExtractor(settings=ExtractorSettings.from_env())
    results = extractor.extract_many(args.urls, max_workers=args.workers)

    data = [r.to_payload() for r in results]
    text = json.dumps(data, indent=2, ensure_ascii=False)

    if args.out:
        out_path = Path(args.out).expanduser().resolve()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        ok = sum(1 for r in results if r.ok)
        print(f"Wrote {len(data)} results ({ok} succeeded) to: {out_path}")
    else:
        print(text)

    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
