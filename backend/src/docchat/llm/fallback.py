"""Ordered multi-model completion with fallback."""

import logging
from collections.abc import Sequence

from docchat.chat.schemas import CompletionResult, PromptPayload
from docchat.constants.llm import (
    DEFAULT_TEMPERATURE,
    EMPTY_RESPONSE_PLACEHOLDER,
    MAX_TOKENS,
)
from docchat.llm.client import LLMClient, LLMError

logger = logging.getLogger(__name__)


class ProviderError(LLMError):
    """Raised when every model tier has failed.

    The message is the last tier's failure message so it can be classified.
    """

    def __init__(self, message: str, model: str | None = None):
        super().__init__(message)
        self.model = model


class FallbackCompleter:
    """Try each client in order until one answers.

    Tiers are attempted sequentially, each exactly once. The next tier is only
    called after the previous one has failed.
    """

    def __init__(
        self,
        clients: Sequence[LLMClient],
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
    ):
        if not clients:
            raise ValueError("FallbackCompleter needs at least one client")
        self._clients = tuple(clients)
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def models(self) -> list[str]:
        return [client.model for client in self._clients]

    async def complete(self, payload: PromptPayload) -> CompletionResult:
        """Send the prompt to each tier in turn and return the first answer.

        Args:
            payload: System and user messages.

        Returns:
            CompletionResult with the answer and the model that produced it.
            Empty content is replaced with EMPTY_RESPONSE_PLACEHOLDER.

        Raises:
            ProviderError: If the last tier fails. Carries that tier's message.
        """
        last_error: Exception | None = None
        for index, client in enumerate(self._clients):
            try:
                answer = await client.generate(
                    prompt=payload.user,
                    system_prompt=payload.system,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                )
            except Exception as e:
                last_error = e
                if index + 1 < len(self._clients):
                    logger.warning(
                        f"Model {client.model} failed, falling back to "
                        f"{self._clients[index + 1].model}: {e}"
                    )
                continue
            return CompletionResult(answer=answer or EMPTY_RESPONSE_PLACEHOLDER, model=client.model)

        failed_model = self._clients[-1].model
        logger.error(f"All models failed ({', '.join(self.models)}): {last_error}")
        raise ProviderError(str(last_error), model=failed_model) from last_error
