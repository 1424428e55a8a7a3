"""
Issued-token lifecycle for the TOKEN authentication scheme.

Long-lived key material is exchanged for a short-lived token which is cached
in memory per credential identity and reissued lazily once it is about to
expire or after the API rejects it.
"""

import asyncio
import base64
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx
from loguru import logger

from core.auth import AuthConfig
from core.errors import AuthExchangeError

TOKEN_FIELD_NAMES = ("token", "access_token", "accessToken", "api_token")
TTL_FIELD_NAMES = ("expires_in", "expiresIn", "expires", "ttl", "expire_seconds")


@dataclass(frozen=True)
class IssuedToken:
    """Result of one token exchange."""

    token: str
    ttl_seconds: int


@dataclass(frozen=True)
class CachedToken:
    """A token held by the cache with its absolute expiry."""

    value: str
    expires_at: float
    safety_margin: float = 60

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at - self.safety_margin


def basic_credentials(key_id: str, key_secret: str) -> str:
    """Encode a key pair as a Basic authorization value."""
    raw = f"{key_id}:{key_secret}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def _first_present(payload: dict, names: tuple[str, ...]):
    for name in names:
        value = payload.get(name)
        if value not in (None, ""):
            return value
    return None


async def issue_token(http: httpx.AsyncClient, config: AuthConfig) -> IssuedToken:
    """
    Exchange the configured key pair for an access token.

    Raises:
        AuthExchangeError: on transport failure, non-2xx status, an unreadable
            body or a body without a token field
    """
    url = config.base_url + config.token_path
    headers = {
        "Authorization": basic_credentials(config.key_id, config.key_secret),
        "Accept": "application/json",
        "Cache-Control": "no-store",
    }

    try:
        response = await http.post(url, headers=headers)
    except httpx.HTTPError as e:
        raise AuthExchangeError(None, str(e) or type(e).__name__) from e

    if not response.is_success:
        raise AuthExchangeError(response.status_code, response.text)

    try:
        payload = response.json()
    except ValueError as e:
        raise AuthExchangeError(response.status_code, "Response body is not JSON") from e

    if not isinstance(payload, dict):
        raise AuthExchangeError(response.status_code, "Response body is not a JSON object")

    token = _first_present(payload, TOKEN_FIELD_NAMES)
    if not token:
        raise AuthExchangeError(response.status_code, "Response has no token field")

    ttl = _first_present(payload, TTL_FIELD_NAMES)
    try:
        ttl_seconds = int(ttl) if ttl is not None else config.token_ttl_seconds
    except (TypeError, ValueError):
        ttl_seconds = config.token_ttl_seconds

    return IssuedToken(token=str(token), ttl_seconds=ttl_seconds)


class _Slot:
    """Cache slot for one credential identity."""

    def __init__(self):
        self.lock = asyncio.Lock()
        self.token: CachedToken | None = None
        self.generation = 0


class TokenCache:
    """
    In-memory store of issued tokens keyed by AuthConfig.cache_key.

    Checking the slot and issuing a replacement happen under one lock per
    identity, so concurrent callers share a single exchange. invalidate()
    bumps the slot generation; an exchange that started under an older
    generation returns its token to its caller but does not store it.
    """

    def __init__(
        self,
        safety_margin: float = 60,
        clock: Callable[[], float] = time.time,
        issuer: Callable[[httpx.AsyncClient, AuthConfig], Awaitable[IssuedToken]] = issue_token,
    ):
        self.safety_margin = max(60, safety_margin)
        self._clock = clock
        self._issuer = issuer
        self._slots: dict[tuple, _Slot] = {}

    def __len__(self) -> int:
        return len(self._slots)

    def _slot(self, config: AuthConfig) -> _Slot:
        slot = self._slots.get(config.cache_key)
        if slot is None:
            slot = self._slots[config.cache_key] = _Slot()
        return slot

    def _prune(self) -> None:
        """Drop idle slots whose token is gone or expired."""
        now = self._clock()
        for key, slot in list(self._slots.items()):
            if slot.lock.locked():
                continue
            if slot.token is None or now >= slot.token.expires_at:
                del self._slots[key]

    def _margin_for(self, ttl_seconds: int) -> float:
        """Safety margin for a token; halved TTL when the TTL is too short for the margin."""
        if ttl_seconds <= self.safety_margin:
            logger.warning(
                f"Issued token TTL of {ttl_seconds}s does not exceed the "
                f"{self.safety_margin:g}s safety margin; using {ttl_seconds / 2:g}s instead"
            )
            return ttl_seconds / 2
        return self.safety_margin

    def peek(self, config: AuthConfig) -> CachedToken | None:
        """Return the stored token for config without validating it."""
        slot = self._slots.get(config.cache_key)
        return slot.token if slot else None

    async def get_valid_token(self, http: httpx.AsyncClient, config: AuthConfig) -> str:
        """Return a cached unexpired token, issuing a new one if needed."""
        self._prune()
        slot = self._slot(config)
        async with slot.lock:
            cached = slot.token
            if cached is not None and cached.is_valid(self._clock()):
                return cached.value

            slot.token = None
            generation = slot.generation
            logger.debug(f"Issuing access token for {config.base_url}")
            issued = await self._issuer(http, config)
            token = CachedToken(
                value=issued.token,
                expires_at=self._clock() + issued.ttl_seconds,
                safety_margin=self._margin_for(issued.ttl_seconds),
            )

            if slot.generation == generation:
                slot.token = token
            else:
                logger.debug("Token cache invalidated during issuance; not storing result")
            return token.value

    def invalidate(self, config: AuthConfig) -> None:
        """Drop the cached token for config unconditionally."""
        slot = self._slots.get(config.cache_key)
        if slot is None:
            return
        slot.token = None
        slot.generation += 1
        # A slot with an issuance in flight keeps its generation for the comparison
        if not slot.lock.locked():
            del self._slots[config.cache_key]
