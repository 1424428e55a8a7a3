#!/usr/bin/env python3
"""
Fetch per-employee working hours from the HRMOS attendance API.

Prints a table (or JSON) of total hours and overtime per employee and can
write an Excel report with the table and a bar chart.

Usage:
    uv run python src/scripts/fetch_timesheets.py --month 2025-11
    uv run python src/scripts/fetch_timesheets.py --from 2025-11-01 --to 2025-11-15 --xlsx out.xlsx
"""

import argparse
import asyncio
import calendar
import json
import sys
from datetime import date, datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger

from api.logging import configure_logging
from core.auth import get_auth_defaults, resolve_auth_config
from core.config import DEFAULT_FROM, DEFAULT_TO, HRMOS_TOKEN_SAFETY_MARGIN
from core.errors import HrmosError
from core.hrmos_client import create_http_client
from core.tokens import TokenCache
from services.reports import create_timesheet_excel_report, format_timesheet_table
from services.timesheets import get_timesheets


# =============================================================================
# DATE UTILITIES
# =============================================================================


def get_date_range(
    date_from: str | None, date_to: str | None, month_str: str | None, today: date | None = None
) -> tuple[date, date]:
    """
    Work out the date range to fetch.

    Precedence: explicit --from/--to, then --month (YYYY-MM), then the
    HRMOS_DEFAULT_FROM/HRMOS_DEFAULT_TO environment defaults, then the
    current month up to today.
    """
    today = today or date.today()

    if date_from or date_to:
        start = datetime.strptime(date_from, "%Y-%m-%d").date() if date_from else today.replace(day=1)
        end = datetime.strptime(date_to, "%Y-%m-%d").date() if date_to else today
    elif month_str:
        year, month = map(int, month_str.split("-"))
        start = date(year, month, 1)
        _, last_day = calendar.monthrange(year, month)
        end = date(year, month, last_day)
    elif DEFAULT_FROM and DEFAULT_TO:
        start = datetime.strptime(DEFAULT_FROM, "%Y-%m-%d").date()
        end = datetime.strptime(DEFAULT_TO, "%Y-%m-%d").date()
    else:
        start, end = today.replace(day=1), today

    if start > end:
        raise ValueError(f"Start date {start} is after end date {end}")
    return start, end


# =============================================================================
# MAIN
# =============================================================================


async def main(
    date_from: str | None = None,
    date_to: str | None = None,
    month_str: str | None = None,
    xlsx_path: str | None = None,
    as_json: bool = False,
) -> int:
    """Main entry point; returns the process exit code."""
    try:
        start_date, end_date = get_date_range(date_from, date_to, month_str)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        config = resolve_auth_config(None, get_auth_defaults())
        logger.info(f"Fetching timesheets for {start_date} to {end_date} from {config.base_url}")

        async with create_http_client() as http:
            timesheets = await get_timesheets(
                config,
                start_date.isoformat(),
                end_date.isoformat(),
                http=http,
                token_cache=TokenCache(safety_margin=HRMOS_TOKEN_SAFETY_MARGIN),
            )
    except HrmosError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps([t.model_dump(by_alias=True) for t in timesheets], ensure_ascii=False, indent=2))
    else:
        print(format_timesheet_table(timesheets))

    if xlsx_path:
        create_timesheet_excel_report(
            timesheets, Path(xlsx_path), title=f"Working hours {start_date} to {end_date}"
        )

    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fetch per-employee working hours")
    parser.add_argument("--from", dest="date_from", help="Start date (YYYY-MM-DD)")
    parser.add_argument("--to", dest="date_to", help="End date (YYYY-MM-DD)")
    parser.add_argument("--month", help="Target month (YYYY-MM)")
    parser.add_argument("--xlsx", help="Also write an Excel report to this path")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    args = parser.parse_args()

    configure_logging()
    sys.exit(asyncio.run(main(args.date_from, args.date_to, args.month, args.xlsx, args.json)))
