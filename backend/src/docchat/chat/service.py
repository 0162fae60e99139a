"""Documentation Q&A service: validate, truncate, prompt, complete."""

from __future__ import annotations

import logging
import sqlite3
from typing import TYPE_CHECKING, Any

from docchat.chat.errors import ChatError, ErrorCategory, classify_provider_error
from docchat.chat.prompts import build_chat_prompt
from docchat.chat.schemas import ChatRequest, CompletionResult
from docchat.chat.truncation import truncate_docs
from docchat.chat.validation import validate_chat_request
from docchat.config import ChatConfig
from docchat.constants.llm import TOKENS_PER_CHAR
from docchat.llm.fallback import FallbackCompleter, ProviderError

if TYPE_CHECKING:
    from docchat.db.usage import UsageStore

logger = logging.getLogger(__name__)


def question_preview(question: str, limit: int) -> str:
    """Shorten a question for log output."""
    if len(question) > limit:
        return question[:limit] + "..."
    return question


class ChatService:
    """Answers questions about caller-supplied documentation.

    Holds only read-only collaborators, so one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        chat_config: ChatConfig,
        completer: FallbackCompleter,
        usage_store: UsageStore | None = None,
        tokens_per_char: float = TOKENS_PER_CHAR,
    ):
        self._config = chat_config
        self._completer = completer
        self._usage_store = usage_store
        self._tokens_per_char = tokens_per_char

    def validate(self, body: Any) -> ChatRequest:
        """Validate a parsed request body.

        Raises:
            ChatError: CLIENT category with the rejection reason as message.
        """
        request, error = validate_chat_request(body, self._config.max_question_length)
        if request is None:
            raise ChatError(ErrorCategory.CLIENT, detail=error, message=error)
        return request

    async def ask(self, request: ChatRequest, caller: str = "unknown") -> CompletionResult:
        """Answer a validated request.

        Args:
            request: Validated question and documentation.
            caller: Caller identifier for logs and usage records.

        Returns:
            The answer and the model that produced it.

        Raises:
            ChatError: With a provider category when every model tier fails.
        """
        logger.info(
            f'Chat request from {caller}: '
            f'"{question_preview(request.question, self._config.log_preview_length)}"'
        )

        docs = truncate_docs(
            request.docs,
            self._config.max_docs_length,
            self._config.important_budget_ratio,
        )
        if docs is not request.docs:
            logger.info(
                f"Truncated documentation from {len(request.docs)} to {len(docs)} characters"
            )

        payload = build_chat_prompt(request.question, docs)

        try:
            result = await self._completer.complete(payload)
        except ProviderError as e:
            category = classify_provider_error(str(e))
            logger.error(f"Chat request failed ({category.status_code}): {e}")
            raise ChatError(category, detail=str(e)) from e

        self._record_usage(request, payload.system + payload.user, result, caller)
        return result

    def _record_usage(
        self, request: ChatRequest, prompt: str, result: CompletionResult, caller: str
    ) -> None:
        if self._usage_store is None:
            return

        tokens_used = int((len(prompt) + len(result.answer)) * self._tokens_per_char)
        try:
            self._usage_store.record(
                question=request.question,
                response_length=len(result.answer),
                model_used=result.model,
                tokens_used=tokens_used,
                project_id=request.project_id,
                ip_address=None if caller == "unknown" else caller,
            )
        except sqlite3.Error as e:
            logger.warning(f"Failed to record prompt usage: {e}")
