"""Validation of raw chat request bodies."""

from typing import Any

from docchat.chat.schemas import ChatRequest

BODY_NOT_OBJECT = "Request body must be a JSON object"
QUESTION_REQUIRED = "Question is required and must be a non-empty string"
DOCS_REQUIRED = "Documentation content is required and must be a non-empty string"


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def validate_chat_request(
    body: Any, max_question_length: int
) -> tuple[ChatRequest | None, str]:
    """Check a parsed request body against the chat endpoint's rules.

    Rules are applied in order and the first failure wins: the body must be an
    object, question and docs must be non-empty strings after trimming, and the
    question must not exceed max_question_length characters.

    Args:
        body: Parsed JSON body (any type).
        max_question_length: Longest accepted question, in characters.

    Returns:
        Tuple of (request, error_message).
        - request: the accepted ChatRequest, or None if rejected
        - error_message: empty string if accepted, the rejection reason otherwise
    """
    if not isinstance(body, dict):
        return None, BODY_NOT_OBJECT

    question = body.get("question")
    docs = body.get("docs")

    if not _is_non_empty_string(question):
        return None, QUESTION_REQUIRED

    if not _is_non_empty_string(docs):
        return None, DOCS_REQUIRED

    if len(question) > max_question_length:
        return None, (
            f"Question too long. Maximum {max_question_length} characters allowed"
        )

    project_id = body.get("project_id")
    if not isinstance(project_id, str) or not project_id:
        project_id = None

    return ChatRequest(question=question, docs=docs, project_id=project_id), ""
