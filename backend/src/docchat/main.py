"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import FastAPI, Depends, Response
from fastapi.responses import JSONResponse

# Logging constants defined here (not in constants/) because logging.basicConfig()
# must run before any module imports that might create loggers.
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(
    format=LOG_FORMAT,
    datefmt=DATE_FORMAT,
    level=logging.INFO,
)

# Unify uvicorn loggers with app format
for uvicorn_logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
    uvicorn_logger = logging.getLogger(uvicorn_logger_name)
    uvicorn_logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    uvicorn_logger.addHandler(handler)

from docchat.api.deps import get_settings  # noqa: E402
from docchat.api.routers import chat, projects, stats  # noqa: E402
from docchat.api.schemas import HealthStatus  # noqa: E402
from docchat.config import ConfigError, Settings  # noqa: E402

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan handler for startup and shutdown events.

    On startup, loads settings once and reports what is configured.
    """
    try:
        settings = get_settings()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        raise

    if not settings.provider_configured:
        logger.warning("GROQ_API_KEY is not set - chat requests will fail")
    logger.info(f"Models: {', '.join(settings.models)} via {settings.provider}")
    logger.info(f"Data directory: {settings.data_dir}")
    logger.info("docchat started")

    yield


app = FastAPI(
    title="docchat",
    description="Ask questions about generated Django project documentation",
    version=VERSION,
    lifespan=lifespan,
)


@app.get("/api/health", response_model=HealthStatus)
async def health_check(
    response: Response, settings: Settings = Depends(get_settings)
) -> HealthStatus:
    """Health check endpoint."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    return HealthStatus(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=VERSION,
        provider_configured=settings.provider_configured,
        api_key_required=settings.api_key_required,
    )


@app.api_route(
    "/api/health",
    methods=["POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def health_method_not_allowed() -> JSONResponse:
    return JSONResponse(status_code=405, content={"error": "Method not allowed. Use GET."})


app.include_router(chat.router)
app.include_router(projects.router)
app.include_router(stats.router)
