"""Project documentation API endpoints."""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, Response

from docchat.api.deps import get_project_store, get_settings
from docchat.api.responses import server_error_response
from docchat.api.schemas import Project, ProjectUpsert
from docchat.config import Settings

router = APIRouter(prefix="/api/projects", tags=["projects"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

MISSING_FIELDS = "Missing required fields: name, path, settings_module"
INVALID_BODY = "Invalid project data"


@router.options("")
async def projects_preflight() -> Response:
    """CORS preflight: headers only, no body."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.api_route("", methods=["PUT", "PATCH", "DELETE"], include_in_schema=False)
async def projects_method_not_allowed() -> JSONResponse:
    return JSONResponse(
        status_code=405, content={"error": "Method not allowed"}, headers=CORS_HEADERS
    )


@router.get("", response_model=list[Project] | Project)
async def get_projects(
    response: Response,
    id: Optional[str] = Query(None, description="Return only this project"),
    settings: Settings = Depends(get_settings),
):
    """List all projects, most recently updated first, or fetch one by id."""
    response.headers.update(CORS_HEADERS)
    try:
        store = get_project_store()
        if id:
            record = store.get(id)
            if record is None:
                return JSONResponse(
                    status_code=404,
                    content={"error": "Project not found"},
                    headers=CORS_HEADERS,
                )
            return Project(**asdict(record))
        return [Project(**asdict(record)) for record in store.list_all()]
    except Exception as e:
        return server_error_response("load projects", e, settings, CORS_HEADERS)


@router.post("", response_model=Project)
async def upsert_project(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
):
    """Create a project, or update the one stored under the same path.

    The body is validated here rather than by FastAPI so that a malformed
    body gets the same 400 error shape as a missing field.
    """
    response.headers.update(CORS_HEADERS)
    try:
        data = ProjectUpsert.model_validate(await request.json())
    except ValueError:
        # Covers undecodable JSON and pydantic ValidationError alike
        return JSONResponse(status_code=400, content={"error": INVALID_BODY}, headers=CORS_HEADERS)

    if not data.name or not data.path or not data.settings_module:
        return JSONResponse(
            status_code=400, content={"error": MISSING_FIELDS}, headers=CORS_HEADERS
        )

    try:
        record = get_project_store().upsert(
            name=data.name,
            path=data.path,
            settings_module=data.settings_module,
            markdown_content=data.markdown_content or "",
            html_content=data.html_content or "",
            diagram_content=data.diagram_content or "",
            models_count=data.models_count or 0,
            serializers_count=data.serializers_count or 0,
            views_count=data.views_count or 0,
        )
    except Exception as e:
        return server_error_response("save project", e, settings, CORS_HEADERS)
    return Project(**asdict(record))
