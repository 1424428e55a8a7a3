"""
Timesheet retrieval: fetch attendance summaries and normalize them.
"""

import httpx
from loguru import logger

from core.auth import AuthConfig
from core.hrmos_client import fetch_attendance_summaries
from core.tokens import TokenCache
from models.attendance import Timesheet, to_timesheet


async def get_timesheets(
    config: AuthConfig,
    date_from: str,
    date_to: str,
    *,
    http: httpx.AsyncClient,
    token_cache: TokenCache | None = None,
) -> list[Timesheet]:
    """Return one timesheet per employee for the date range."""
    summaries = await fetch_attendance_summaries(
        config, date_from, date_to, http=http, token_cache=token_cache
    )
    logger.info(f"Fetched {len(summaries)} attendance summaries for {date_from} to {date_to}")
    return [to_timesheet(s) for s in summaries]
