"""
HRMOS attendance API client: authenticated, paginated summary fetching.
"""

import httpx
from loguru import logger

from core.auth import AuthConfig, AuthScheme
from core.config import MAX_PAGES, PAGE_SIZE, REQUEST_TIMEOUT_SECONDS, SUMMARIES_PATH
from core.errors import ConfigurationError, ExternalApiError, ProtocolError
from core.tokens import TokenCache
from models.attendance import AttendanceSummary, WrappedEnvelope, decode_envelope


def create_http_client(timeout: float = REQUEST_TIMEOUT_SECONDS) -> httpx.AsyncClient:
    """Create the shared HTTP client used for all calls to the attendance API."""
    return httpx.AsyncClient(timeout=timeout, headers={"Accept": "application/json"})


async def build_auth_headers(
    config: AuthConfig, http: httpx.AsyncClient, token_cache: TokenCache | None
) -> dict[str, str]:
    """Build the authentication header for the configured scheme."""
    if config.scheme is AuthScheme.BEARER:
        return {"Authorization": f"Bearer {config.api_key}"}

    if config.scheme is AuthScheme.ISSUED_TOKEN:
        if token_cache is None:
            raise ConfigurationError("token_cache", "TOKEN scheme requires a token cache")
        token = await token_cache.get_valid_token(http, config)
        return {config.token_header_name: token}

    return {config.key_header_name: config.api_key}


def build_query_params(**params) -> dict[str, str]:
    """Drop empty values so blank query parameters are never sent."""
    return {k: str(v) for k, v in params.items() if v is not None and v != ""}


async def _get_page(
    config: AuthConfig,
    http: httpx.AsyncClient,
    token_cache: TokenCache | None,
    params: dict[str, str],
) -> httpx.Response:
    headers = await build_auth_headers(config, http, token_cache)
    headers["Accept"] = "application/json"
    headers["Cache-Control"] = "no-store"

    try:
        return await http.get(config.base_url + SUMMARIES_PATH, params=params, headers=headers)
    except httpx.HTTPError as e:
        raise ExternalApiError(None, str(e) or type(e).__name__) from e


def _parse_items(response: httpx.Response) -> tuple[list[AttendanceSummary], int | None]:
    """Decode one page body into summaries and the optional total count."""
    try:
        body = response.json()
    except ValueError as e:
        raise ExternalApiError(None, "Response body is not JSON") from e

    envelope = decode_envelope(body)
    for idx, item in enumerate(envelope.items):
        if not isinstance(item, dict):
            raise ExternalApiError(
                None,
                f"Unexpected attendance summary shape at index {idx}: "
                f"expected an object, got {type(item).__name__}",
            )
    items = [AttendanceSummary.model_validate(item) for item in envelope.items]

    total = envelope.total if isinstance(envelope, WrappedEnvelope) else None
    return items, total


async def fetch_attendance_summaries(
    config: AuthConfig,
    date_from: str,
    date_to: str,
    *,
    http: httpx.AsyncClient,
    token_cache: TokenCache | None = None,
    per_page: int = PAGE_SIZE,
    max_pages: int = MAX_PAGES,
) -> list[AttendanceSummary]:
    """
    Fetch all attendance summaries between date_from and date_to.

    Pages are requested sequentially until a page comes back shorter than
    per_page or the envelope's total has been reached. Under the TOKEN scheme
    a single 401 triggers one token reissue and a retry of the same page.

    Raises:
        ExternalApiError: on any failed page; nothing collected so far is returned
        AuthExchangeError: if a token cannot be issued
        ProtocolError: if max_pages pages were fetched without reaching the end
    """
    summaries: list[AttendanceSummary] = []
    reissued = False
    page = 1

    while True:
        if page > max_pages:
            raise ProtocolError(
                f"Pagination did not terminate after {max_pages} pages "
                f"({len(summaries)} records collected)"
            )

        params = build_query_params(
            **{"from": date_from, "to": date_to},
            page=page,
            per_page=per_page,
            company_id=config.tenant_id,
        )
        response = await _get_page(config, http, token_cache, params)

        if (
            response.status_code == 401
            and config.scheme is AuthScheme.ISSUED_TOKEN
            and not reissued
        ):
            logger.info(f"Access token rejected on page {page}; reissuing and retrying once")
            reissued = True
            token_cache.invalidate(config)
            response = await _get_page(config, http, token_cache, params)

        if not response.is_success:
            raise ExternalApiError(response.status_code, response.text)

        items, total = _parse_items(response)
        summaries.extend(items)
        logger.debug(f"Fetched page {page}: {len(items)} records (total={total})")

        has_next = len(items) == per_page and (len(summaries) < total if total else len(items) > 0)
        if not has_next:
            break
        page += 1

    return summaries
