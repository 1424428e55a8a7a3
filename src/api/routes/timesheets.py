"""Timesheet endpoint."""

import time
from datetime import date, datetime
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from api.dependencies import (
    get_auth_config_defaults,
    get_credential_overrides,
    get_http_client,
    get_token_cache,
)
from api.logging import RequestLog, log_request
from api.models.responses import ErrorResponse
from core.auth import AuthDefaults, CredentialOverrides, resolve_auth_config
from core.errors import HrmosError
from core.tokens import TokenCache
from models.attendance import Timesheet
from services.timesheets import get_timesheets

router = APIRouter()


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def parse_query_date(name: str, value: str) -> date:
    """Parse a YYYY-MM-DD query value, raising ValueError with a readable message."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"'{name}' must be a date in YYYY-MM-DD format")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


@router.get(
    "/timesheets",
    response_model=list[Timesheet],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def list_timesheets(
    request: Request,
    date_from: Annotated[str | None, Query(alias="from", description="Start date (YYYY-MM-DD)")] = None,
    date_to: Annotated[str | None, Query(alias="to", description="End date (YYYY-MM-DD)")] = None,
    overrides: CredentialOverrides = Depends(get_credential_overrides),
    defaults: AuthDefaults = Depends(get_auth_config_defaults),
    http: httpx.AsyncClient = Depends(get_http_client),
    token_cache: TokenCache = Depends(get_token_cache),
):
    """
    Return per-employee timesheets for a date range.

    Credentials sent as x-api-base-url / x-api-key / x-api-key-header /
    x-company-id headers take precedence over the server's configuration.
    """
    start_time = time.time()

    request_log = RequestLog(
        endpoint="/timesheets",
        method="GET",
        client_ip=get_client_ip(request),
        date_from=date_from,
        date_to=date_to,
    )

    try:
        if not date_from or not date_to:
            request_log.status_code = status.HTTP_400_BAD_REQUEST
            request_log.error_message = "from and to are required"
            return error_response(status.HTTP_400_BAD_REQUEST, "from and to are required")

        try:
            start = parse_query_date("from", date_from)
            end = parse_query_date("to", date_to)
        except ValueError as e:
            request_log.status_code = status.HTTP_400_BAD_REQUEST
            request_log.error_message = str(e)
            return error_response(status.HTTP_400_BAD_REQUEST, str(e))

        if start > end:
            message = "'from' must not be after 'to'"
            request_log.status_code = status.HTTP_400_BAD_REQUEST
            request_log.error_message = message
            return error_response(status.HTTP_400_BAD_REQUEST, message)

        config = resolve_auth_config(overrides, defaults)
        request_log.base_url = config.base_url

        timesheets = await get_timesheets(
            config, date_from, date_to, http=http, token_cache=token_cache
        )

        request_log.status_code = 200
        request_log.records_returned = len(timesheets)
        return timesheets

    except HrmosError as e:
        request_log.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        request_log.error_type = type(e).__name__
        request_log.error_message = str(e)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    except Exception as e:
        # Answered by the global exception handler
        request_log.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        request_log.error_type = type(e).__name__
        request_log.error_message = str(e)
        raise

    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        log_request(request_log)
