"""Usage statistics API endpoint."""

from dataclasses import asdict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from docchat.api.deps import get_settings, get_usage_store
from docchat.api.responses import server_error_response
from docchat.api.schemas import UsageStatsResponse
from docchat.config import Settings

router = APIRouter(prefix="/api/stats", tags=["stats"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@router.options("")
async def stats_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@router.api_route("", methods=["POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def stats_method_not_allowed() -> JSONResponse:
    return JSONResponse(
        status_code=405,
        content={"error": "Method not allowed. Use GET."},
        headers=CORS_HEADERS,
    )


@router.get("", response_model=UsageStatsResponse)
async def get_stats(response: Response, settings: Settings = Depends(get_settings)):
    """Totals, recent prompt counts and the five most used models."""
    response.headers.update(CORS_HEADERS)
    try:
        stats = get_usage_store().stats()
    except Exception as e:
        return server_error_response("load usage stats", e, settings, CORS_HEADERS)
    return UsageStatsResponse(**asdict(stats))
