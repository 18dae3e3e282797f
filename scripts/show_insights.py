#!/usr/bin/env python3
"""
Reading Insights Report

Fetch a user's reading insights from the reading club API and print them.

Usage:
    # Print the metrics report and a summary
    python scripts/show_insights.py --user-id <user_id>

    # Skip the AI summary
    python scripts/show_insights.py --no-summary

    # Force the server to regenerate its AI summary
    python scripts/show_insights.py --refresh

    # Dump the raw insights as JSON
    python scripts/show_insights.py --json

Environment Variables (set in .env or environment):
    Required:
    - API_BASE_URL: Reading club API root, e.g. https://api.example.com

    Optional:
    - SESSION_USER_ID: Signed-in user (overridden by --user-id)
    - DEBUG: Enable verbose logging
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

# Add backend to path for imports (must be before reading_insights.* imports)
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

from reading_insights.exceptions import InsightsUnavailableError
from reading_insights.services.api import ApiClient, ReadingClubApi, SessionStore
from reading_insights.services.insights import (
    InsightsService,
    InsightsSummarizer,
    format_insights_lines,
)


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    # Reduce noise from httpx (unless --debug)
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


async def show_insights(
    user_id: Optional[str],
    with_summary: bool = True,
    refresh: bool = False,
    as_json: bool = False,
) -> int:
    """Fetch and print insights. Returns the process exit code."""
    try:
        client = ApiClient(session=SessionStore(user_id))
    except ValueError as e:
        print(f"❌ {e}")
        return 1

    async with client:
        api = ReadingClubApi(client)

        try:
            report = await InsightsService(api).fetch_insights()
        except InsightsUnavailableError as e:
            print(f"❌ {e.message}")
            return 1

        if as_json:
            data = {
                "source": report.source.value,
                "insights": report.insights.model_dump(mode="json", by_alias=True),
            }
            print(json.dumps(data, indent=2))
            return 0

        print("\n" + "=" * 60)
        print(f"📚 READING INSIGHTS ({report.source.value})")
        print("=" * 60)
        for line in format_insights_lines(report.insights):
            print(f"  {line}")

        if with_summary:
            summary = await InsightsSummarizer(api).summarize(
                report.insights, refresh=refresh
            )
            print(f"\n{'─' * 60}")
            print(summary)

    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Print reading insights for the signed-in user"
    )
    parser.add_argument("--user-id", help="User id (default: SESSION_USER_ID)")
    parser.add_argument(
        "--no-summary", action="store_true", help="Skip the AI summary"
    )
    parser.add_argument(
        "--refresh", action="store_true", help="Regenerate the AI summary"
    )
    parser.add_argument("--json", action="store_true", help="Print raw JSON")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    setup_logging(args.debug)

    exit_code = asyncio.run(
        show_insights(
            user_id=args.user_id,
            with_summary=not args.no_summary,
            refresh=args.refresh,
            as_json=args.json,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
