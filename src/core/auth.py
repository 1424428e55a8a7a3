"""
Authentication configuration for the HRMOS attendance API.

Resolves per-request credential overrides against the process-wide defaults
from core.config into a single immutable AuthConfig.
"""

from dataclasses import dataclass, replace
from enum import Enum

from core import config
from core.errors import ConfigurationError


class AuthScheme(str, Enum):
    """How requests to the attendance API are authenticated."""

    STATIC_KEY = "X-API-KEY"
    BEARER = "BEARER"
    ISSUED_TOKEN = "TOKEN"

    @classmethod
    def parse(cls, value: str | None) -> "AuthScheme":
        """Parse a scheme name from configuration (case-insensitive)."""
        name = (value or "X-API-KEY").strip().upper()
        aliases = {
            "X-API-KEY": cls.STATIC_KEY,
            "API_KEY": cls.STATIC_KEY,
            "STATIC_KEY": cls.STATIC_KEY,
            "KEY": cls.STATIC_KEY,
            "BEARER": cls.BEARER,
            "TOKEN": cls.ISSUED_TOKEN,
            "ISSUED_TOKEN": cls.ISSUED_TOKEN,
        }
        if name not in aliases:
            raise ConfigurationError(
                "HRMOS_AUTH_SCHEME",
                f"HRMOS_AUTH_SCHEME has unsupported value '{value}' "
                "(expected X-API-KEY, BEARER or TOKEN)",
            )
        return aliases[name]


@dataclass(frozen=True)
class AuthDefaults:
    """Process-wide fallback values, usually read from the environment."""

    base_url: str = ""
    api_key: str = ""
    key_id: str = ""
    key_secret: str = ""
    scheme: str = "X-API-KEY"
    key_header_name: str = "X-API-KEY"
    token_header_name: str = "X-Token"
    token_path: str = "/api/v1/authentication/token"
    token_ttl_seconds: int = 3000
    tenant_id: str | None = None


@dataclass(frozen=True)
class CredentialOverrides:
    """Per-call values supplied by the caller (e.g. request headers)."""

    base_url: str | None = None
    api_key: str | None = None
    api_key_header: str | None = None
    tenant_id: str | None = None


@dataclass(frozen=True)
class AuthConfig:
    """Resolved authentication configuration for one request."""

    base_url: str
    scheme: AuthScheme
    api_key: str = ""
    key_id: str = ""
    key_secret: str = ""
    key_header_name: str = "X-API-KEY"
    token_header_name: str = "X-Token"
    token_path: str = "/api/v1/authentication/token"
    token_ttl_seconds: int = 3000
    tenant_id: str | None = None

    @property
    def cache_key(self) -> tuple[str, str, str | None]:
        """Identity of the credentials an issued token belongs to."""
        return (self.base_url, self.key_id, self.tenant_id)


def get_auth_defaults() -> AuthDefaults:
    """Snapshot the environment-derived defaults from core.config."""
    return AuthDefaults(
        base_url=config.HRMOS_API_BASE_URL,
        api_key=config.HRMOS_API_KEY,
        key_id=config.HRMOS_KEY_ID,
        key_secret=config.HRMOS_KEY_SECRET,
        scheme=config.HRMOS_AUTH_SCHEME,
        key_header_name=config.HRMOS_API_KEY_HEADER,
        token_header_name=config.HRMOS_TOKEN_HEADER,
        token_path=config.HRMOS_TOKEN_PATH,
        token_ttl_seconds=config.HRMOS_TOKEN_TTL,
        tenant_id=config.HRMOS_COMPANY_ID,
    )


def _pick(override: str | None, default: str | None) -> str | None:
    """Return the override unless it is blank."""
    if override is not None and override.strip():
        return override.strip()
    return default


def resolve_auth_config(
    overrides: CredentialOverrides | None, defaults: AuthDefaults
) -> AuthConfig:
    """
    Build the AuthConfig for one call.

    Non-blank per-call values win over defaults field by field. Raises
    ConfigurationError naming the first missing field; never performs I/O.
    """
    overrides = overrides or CredentialOverrides()
    scheme = AuthScheme.parse(defaults.scheme)

    base_url = _pick(overrides.base_url, defaults.base_url) or ""
    api_key = _pick(overrides.api_key, defaults.api_key) or ""
    key_header_name = _pick(overrides.api_key_header, defaults.key_header_name) or "X-API-KEY"
    tenant_id = _pick(overrides.tenant_id, defaults.tenant_id) or None

    if not base_url:
        raise ConfigurationError("HRMOS_API_BASE_URL")

    resolved = AuthConfig(
        base_url=base_url.rstrip("/"),
        scheme=scheme,
        api_key=api_key,
        key_header_name=key_header_name,
        token_header_name=defaults.token_header_name or "X-Token",
        token_path=defaults.token_path,
        token_ttl_seconds=defaults.token_ttl_seconds,
        tenant_id=tenant_id,
    )

    if scheme is AuthScheme.ISSUED_TOKEN:
        # A per-call key replaces the configured key pair; HRMOS accepts the
        # secret key alone as the Basic user name.
        if overrides.api_key and overrides.api_key.strip():
            key_id, key_secret = api_key, ""
        else:
            key_id = defaults.key_id or defaults.api_key
            key_secret = defaults.key_secret if defaults.key_id else ""
        if not key_id:
            raise ConfigurationError("HRMOS_KEY_ID")
        if not resolved.token_path:
            raise ConfigurationError("HRMOS_TOKEN_PATH")
        return replace(resolved, key_id=key_id, key_secret=key_secret)

    if not api_key:
        raise ConfigurationError("HRMOS_API_KEY")
    return resolved
