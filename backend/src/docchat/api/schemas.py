"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    """Health check response."""

    status: str = "ok"
    timestamp: str
    version: str
    provider_configured: bool
    api_key_required: bool


class Project(BaseModel):
    """A stored project and its generated documentation."""

    id: str
    name: str
    path: str
    settings_module: str
    created_at: str
    updated_at: str
    markdown_content: str = ""
    html_content: str = ""
    diagram_content: str = ""
    models_count: int = 0
    serializers_count: int = 0
    views_count: int = 0


class ProjectUpsert(BaseModel):
    """Request to create or update a project (matched by path)."""

    name: str | None = None
    path: str | None = None
    settings_module: str | None = None
    markdown_content: str | None = None
    html_content: str | None = None
    diagram_content: str | None = None
    models_count: int | None = Field(None, ge=0)
    serializers_count: int | None = Field(None, ge=0)
    views_count: int | None = Field(None, ge=0)


class ModelUsage(BaseModel):
    """Prompt count for one model."""

    model: str
    count: int


class UsageStatsResponse(BaseModel):
    """Aggregate prompt usage."""

    total_prompts: int
    total_tokens: int
    prompts_today: int
    prompts_this_week: int
    prompts_this_month: int
    top_models: list[ModelUsage] = Field(default_factory=list)
