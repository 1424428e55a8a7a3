"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.auth import AuthConfig, AuthScheme  # noqa: E402

BASE_URL = "https://hrmos.example.com"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def sample_summary():
    """Sample attendance summary as returned by the API."""
    return {
        "employee_id": 1,
        "employee_name": "Tanaka Taro",
        "total_work_minutes": 2400,
        "overtime_minutes": 300,
    }


@pytest.fixture
def make_summaries():
    """Build n numbered attendance summaries."""

    def _make(n: int, start: int = 1) -> list[dict]:
        return [
            {
                "employee_id": i,
                "employee_name": f"Employee {i}",
                "total_work_minutes": 60 * i,
                "overtime_minutes": 6 * i,
            }
            for i in range(start, start + n)
        ]

    return _make


@pytest.fixture
def static_key_config():
    return AuthConfig(base_url=BASE_URL, scheme=AuthScheme.STATIC_KEY, api_key="secret-key")


@pytest.fixture
def bearer_config():
    return AuthConfig(base_url=BASE_URL, scheme=AuthScheme.BEARER, api_key="bearer-key")


@pytest.fixture
def token_config():
    return AuthConfig(
        base_url=BASE_URL,
        scheme=AuthScheme.ISSUED_TOKEN,
        key_id="key-id",
        key_secret="key-secret",
        tenant_id="acme",
    )


@pytest.fixture
def mock_http():
    """Create an AsyncClient whose requests are answered by handler."""

    def _make(handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
