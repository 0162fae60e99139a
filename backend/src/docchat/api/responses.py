"""JSON error responses shared by the project and stats routers."""

import logging

from fastapi.responses import JSONResponse

from docchat.config import Settings

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


def server_error_response(
    action: str,
    error: Exception,
    settings: Settings,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Log a failed store operation and build the 500 body.

    Args:
        action: What was being attempted, for the log line.
        error: The failure.
        settings: Decides whether the raw failure text is exposed.
        headers: Extra response headers (CORS).
    """
    logger.error(f"Failed to {action}: {error}")
    content = {"error": INTERNAL_ERROR}
    if not settings.is_production:
        content["details"] = str(error)
    return JSONResponse(status_code=500, content=content, headers=headers)
