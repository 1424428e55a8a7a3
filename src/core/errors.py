"""
Error types raised by the HRMOS client.

All of them reach the HTTP boundary unchanged and are reported as a 500 with
the error's message.
"""


class HrmosError(Exception):
    """Base class for failures while talking to the attendance API."""


class ConfigurationError(HrmosError):
    """A required configuration value is missing or invalid. Raised before any I/O."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"{field} is not set")


class AuthExchangeError(HrmosError):
    """Exchanging credentials for an access token failed."""

    def __init__(self, status: int | None, body: str):
        self.status = status
        self.body = body
        if status is None:
            super().__init__(f"Token exchange failed: {body}")
        else:
            super().__init__(f"Token exchange failed with status {status}: {body}")


class ExternalApiError(HrmosError):
    """The attendance endpoint answered with an error or with something unreadable."""

    def __init__(self, status: int | None, body: str):
        self.status = status
        self.body = body
        if status is None:
            super().__init__(f"Hrmos API request failed: {body}")
        else:
            super().__init__(f"Hrmos API error {status}: {body}")


class ProtocolError(HrmosError):
    """Pagination did not terminate within the page ceiling."""
