import pytest

from core.auth import (
    AuthDefaults,
    AuthScheme,
    CredentialOverrides,
    resolve_auth_config,
)
from core.errors import ConfigurationError

DEFAULTS = AuthDefaults(
    base_url="https://default.example.com/",
    api_key="default-key",
    key_header_name="X-Api-Key",
    tenant_id="default-co",
)


def test_defaults_used_without_overrides():
    config = resolve_auth_config(None, DEFAULTS)

    assert config.base_url == "https://default.example.com"
    assert config.scheme is AuthScheme.STATIC_KEY
    assert config.api_key == "default-key"
    assert config.key_header_name == "X-Api-Key"
    assert config.tenant_id == "default-co"


def test_overrides_take_precedence_over_defaults():
    overrides = CredentialOverrides(
        base_url="https://override.example.com",
        api_key="override-key",
        api_key_header="X-Custom-Key",
        tenant_id="override-co",
    )
    config = resolve_auth_config(overrides, DEFAULTS)

    assert config.base_url == "https://override.example.com"
    assert config.api_key == "override-key"
    assert config.key_header_name == "X-Custom-Key"
    assert config.tenant_id == "override-co"


def test_blank_overrides_fall_back_to_defaults():
    config = resolve_auth_config(CredentialOverrides(base_url="  ", api_key=""), DEFAULTS)

    assert config.base_url == "https://default.example.com"
    assert config.api_key == "default-key"


def test_missing_base_url_fails_fast():
    with pytest.raises(ConfigurationError) as exc:
        resolve_auth_config(None, AuthDefaults(api_key="k"))
    assert exc.value.field == "HRMOS_API_BASE_URL"
    assert "HRMOS_API_BASE_URL" in str(exc.value)


def test_missing_key_fails_fast():
    with pytest.raises(ConfigurationError) as exc:
        resolve_auth_config(None, AuthDefaults(base_url="https://x.example.com"))
    assert exc.value.field == "HRMOS_API_KEY"


def test_override_can_supply_everything_missing_from_defaults():
    overrides = CredentialOverrides(base_url="https://x.example.com", api_key="k")
    config = resolve_auth_config(overrides, AuthDefaults())

    assert config.base_url == "https://x.example.com"
    assert config.tenant_id is None


def test_bearer_scheme():
    config = resolve_auth_config(None, AuthDefaults(base_url="https://x", api_key="k", scheme="bearer"))
    assert config.scheme is AuthScheme.BEARER


def test_unknown_scheme_is_configuration_error():
    with pytest.raises(ConfigurationError):
        resolve_auth_config(None, AuthDefaults(base_url="https://x", api_key="k", scheme="digest"))


def test_issued_token_uses_key_pair():
    defaults = AuthDefaults(
        base_url="https://x", key_id="id", key_secret="secret", scheme="TOKEN"
    )
    config = resolve_auth_config(None, defaults)

    assert config.scheme is AuthScheme.ISSUED_TOKEN
    assert (config.key_id, config.key_secret) == ("id", "secret")
    assert config.token_header_name == "X-Token"
    assert config.token_ttl_seconds == 3000


def test_issued_token_falls_back_to_api_key_as_key_id():
    config = resolve_auth_config(None, AuthDefaults(base_url="https://x", api_key="k", scheme="TOKEN"))
    assert (config.key_id, config.key_secret) == ("k", "")


def test_issued_token_override_key_replaces_pair():
    defaults = AuthDefaults(
        base_url="https://x", key_id="id", key_secret="secret", scheme="TOKEN"
    )
    config = resolve_auth_config(CredentialOverrides(api_key="other"), defaults)
    assert (config.key_id, config.key_secret) == ("other", "")


def test_issued_token_without_key_fails():
    with pytest.raises(ConfigurationError) as exc:
        resolve_auth_config(None, AuthDefaults(base_url="https://x", scheme="TOKEN"))
    assert exc.value.field == "HRMOS_KEY_ID"


def test_cache_key_distinguishes_tenants():
    a = resolve_auth_config(CredentialOverrides(tenant_id="a"), DEFAULTS)
    b = resolve_auth_config(CredentialOverrides(tenant_id="b"), DEFAULTS)
    assert a.cache_key != b.cache_key
