"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_auth_config_defaults
from api.models.responses import HealthResponse
from core.auth import AuthDefaults, resolve_auth_config
from core.config import API_VERSION
from core.errors import ConfigurationError

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(defaults: AuthDefaults = Depends(get_auth_config_defaults)):
    """
    Health check endpoint for monitoring.

    Returns 200 if the default upstream configuration is complete, 503 otherwise.
    Callers that always send their own credentials can ignore the 503.
    """
    timestamp = datetime.now(timezone.utc).isoformat()

    try:
        resolve_auth_config(None, defaults)
    except ConfigurationError as e:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                upstream_configured=False,
                timestamp=timestamp,
                error=str(e),
            ).model_dump(),
        )

    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        upstream_configured=True,
        timestamp=timestamp,
    )
