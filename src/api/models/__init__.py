"""API Pydantic models."""

from .responses import ErrorResponse, HealthResponse

__all__ = ["HealthResponse", "ErrorResponse"]
