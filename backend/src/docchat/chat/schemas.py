"""Chat request, response and record schemas."""

from dataclasses import dataclass

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class ChatRequest:
    """A validated chat request."""

    question: str
    docs: str
    project_id: str | None = None


@dataclass(frozen=True)
class PromptPayload:
    """The system/user message pair sent to the completion provider."""

    system: str
    user: str

    @property
    def messages(self) -> list[dict[str, str]]:
        """Messages in the provider's chat format."""
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


@dataclass(frozen=True)
class CompletionResult:
    """Answer text and the model that produced it."""

    answer: str
    model: str


class ChatResponse(BaseModel):
    """Successful response from the chat endpoint."""

    answer: str = Field(..., description="The generated answer")


class ErrorResponse(BaseModel):
    """Error response shared by all endpoints."""

    error: str = Field(..., description="Caller-facing error message")
    details: str | None = Field(None, description="Raw detail, outside production only")
