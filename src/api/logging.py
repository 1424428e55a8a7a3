"""Request logging for the API (loguru)."""

import sys
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from loguru import logger

from core.config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Replace loguru's default sink with a stderr sink at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level)


@dataclass
class RequestLog:
    """Captured request/response data for logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    date_from: str | None = None
    date_to: str | None = None
    base_url: str | None = None
    status_code: int = 0
    error_type: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    records_returned: int | None = None


def log_request(log: RequestLog) -> None:
    """Emit one structured log line for a finished request."""
    bound = logger.bind(**asdict(log))
    message = (
        f"{log.method} {log.endpoint} -> {log.status_code} "
        f"({log.processing_time_ms} ms, request_id={log.request_id})"
    )
    if log.status_code >= 500:
        bound.error(f"{message}: {log.error_type}: {log.error_message}")
    elif log.status_code >= 400:
        bound.warning(f"{message}: {log.error_message}")
    else:
        bound.info(message)
