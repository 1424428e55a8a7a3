"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from api.logging import configure_logging
from api.models.responses import ErrorResponse
from api.routes import health_router, timesheets_router
from core.config import API_DEBUG, API_VERSION, HRMOS_TOKEN_SAFETY_MARGIN
from core.hrmos_client import create_http_client
from core.tokens import TokenCache


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    configure_logging()

    # Shared for the whole process: one connection pool, one token cache
    app.state.http_client = create_http_client()
    app.state.token_cache = TokenCache(safety_margin=HRMOS_TOKEN_SAFETY_MARGIN)

    yield

    await app.state.http_client.aclose()


app = FastAPI(
    title="Attendance Timesheet API",
    description="REST API serving per-employee working hours from the HRMOS attendance API",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

# CORS middleware (for development)
if API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(message="Internal server error").model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(timesheets_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
