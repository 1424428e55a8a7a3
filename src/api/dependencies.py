"""FastAPI dependencies for per-request credentials and shared resources."""

import httpx
from fastapi import Header, Request

from core.auth import AuthDefaults, CredentialOverrides, get_auth_defaults
from core.tokens import TokenCache


async def get_credential_overrides(
    x_api_base_url: str | None = Header(None, alias="x-api-base-url"),
    x_api_key: str | None = Header(None, alias="x-api-key"),
    x_api_key_header: str | None = Header(None, alias="x-api-key-header"),
    x_company_id: str | None = Header(None, alias="x-company-id"),
) -> CredentialOverrides:
    """Collect optional per-call credentials sent by the dashboard."""
    return CredentialOverrides(
        base_url=x_api_base_url,
        api_key=x_api_key,
        api_key_header=x_api_key_header,
        tenant_id=x_company_id,
    )


def get_auth_config_defaults() -> AuthDefaults:
    """Process-wide defaults from the environment."""
    return get_auth_defaults()


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared HTTP client created in the application lifespan."""
    return request.app.state.http_client


def get_token_cache(request: Request) -> TokenCache:
    """Shared token cache created in the application lifespan."""
    return request.app.state.token_cache
