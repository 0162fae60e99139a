"""Chat API endpoint."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from docchat.api.deps import get_chat_service, get_settings
from docchat.chat.errors import ChatError, ErrorCategory
from docchat.chat.schemas import ChatResponse, ErrorResponse
from docchat.chat.service import ChatService
from docchat.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, x-api-key",
}


def get_caller(request: Request) -> str:
    """Identify the caller by forwarded address, then socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client is not None and request.client.host:
        return request.client.host
    return "unknown"


def _error_response(error: ChatError, settings: Settings | None = None) -> JSONResponse:
    include_details = settings is not None and not settings.is_production
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_body(include_details),
        headers=CORS_HEADERS,
    )


@router.options("/chat")
async def chat_preflight() -> Response:
    """CORS preflight: headers only, no body."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.api_route(
    "/chat",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def chat_method_not_allowed() -> JSONResponse:
    """Reject every verb other than POST and OPTIONS."""
    return _error_response(ChatError(ErrorCategory.METHOD))


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def chat(
    request: Request,
    settings: Settings = Depends(get_settings),
    service: ChatService = Depends(get_chat_service),
) -> JSONResponse:
    """Answer a question about the supplied documentation.

    Body: {"question": str, "docs": str}. When an API key is configured the
    x-api-key header must match it. Oversized docs are truncated before being
    sent to the LLM; if the primary model fails the fallback model is tried.
    """
    try:
        if not settings.provider_configured:
            logger.error("GROQ_API_KEY environment variable is not set")
            raise ChatError(ErrorCategory.CONFIG)

        if settings.api_key_required and request.headers.get("x-api-key") != settings.api_key:
            raise ChatError(ErrorCategory.AUTH)

        try:
            body = await request.json()
        except ValueError:
            body = None

        chat_request = service.validate(body)
        result = await service.ask(chat_request, caller=get_caller(request))
    except ChatError as e:
        return _error_response(e, settings)
    except Exception as e:
        logger.exception(f"Chat API error: {e}")
        return _error_response(ChatError(ErrorCategory.PROVIDER_FATAL, detail=str(e)), settings)

    return JSONResponse(
        content=ChatResponse(answer=result.answer).model_dump(),
        headers=CORS_HEADERS,
    )
