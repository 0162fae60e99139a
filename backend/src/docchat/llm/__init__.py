"""LLM client abstraction."""

from docchat.llm.client import (
    LLMAuthenticationError,
    LLMClient,
    LLMConnectionError,
    LLMContextWindowError,
    LLMError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from docchat.llm.fallback import FallbackCompleter, ProviderError

__all__ = [
    "FallbackCompleter",
    "LLMAuthenticationError",
    "LLMClient",
    "LLMConnectionError",
    "LLMContextWindowError",
    "LLMError",
    "LLMRateLimitError",
    "LLMTimeoutError",
    "ProviderError",
]
