"""
Command line entry point for productivity insights
Usage:
    workpulse-analytics employee records.json            # Personal insights
    workpulse-analytics team records.json --team-size=6  # Team insights
    workpulse-analytics system records.json --flat       # Flattened system rollup
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from workpulse_analytics.config import get_settings
from workpulse_analytics.exceptions import AnalyticsError
from workpulse_analytics.export import export_rows
from workpulse_analytics.insights import ProductivityInsightService
from workpulse_analytics.records import load_records, unwrap_payload

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workpulse-analytics",
        description="WorkPulse productivity analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  workpulse-analytics employee entries.json                  # Personal insights
  workpulse-analytics team entries.json --as-of=2024-03-29   # Team insights
  workpulse-analytics system entries.json --flat             # Export rows
        """,
    )
    parser.add_argument(
        "scope",
        choices=ProductivityInsightService.SCOPES,
        help="Insight scope to build",
    )
    parser.add_argument("records", type=Path, help="JSON file with work records")
    parser.add_argument(
        "--team-size",
        type=_positive_int,
        help="Team size (default: distinct users in the records)",
    )
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        help="Last day of the burnout window, YYYY-MM-DD (default: latest record)",
    )
    parser.add_argument(
        "--flat", action="store_true", help="Print flattened export rows"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    # Setup logging
    log_level = logging.DEBUG if args.verbose else settings.log_level
    logging.basicConfig(
        level=log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    options = {}
    if args.scope in ("employee", "team"):
        options["as_of"] = args.as_of
    if args.scope == "team":
        options["team_size"] = args.team_size

    try:
        with args.records.open(encoding="utf-8") as handle:
            data = json.load(handle)
        records = load_records(unwrap_payload(data))
        service = ProductivityInsightService(settings)
        payload = service.insights(args.scope, records, **options)
    except AnalyticsError as e:
        print(f"❌ Error [{e.error_code}]: {e.message}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"❌ Could not read {args.records}: {e}", file=sys.stderr)
        return 1

    logger.info(f"Built {args.scope} insights from {len(records)} records")
    if args.flat:
        for row in export_rows(payload):
            print(f"{row['metric']}\t{json.dumps(row['value'])}\t{row['unit']}")
    else:
        print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
