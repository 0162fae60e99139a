# backend/src/docchat/llm/client.py
"""LiteLLM-based LLM client."""

import json
import time
from datetime import datetime, timezone
from pathlib import Path

from litellm import acompletion
from litellm.exceptions import (
    APIConnectionError,
    APIError,
    AuthenticationError,
    ContextWindowExceededError,
    RateLimitError,
    Timeout,
)

from docchat.constants.llm import DEFAULT_TEMPERATURE, MAX_TOKENS, REQUEST_TIMEOUT_SECONDS


class LLMError(Exception):
    """Base exception for LLM client errors."""

    pass


class LLMConnectionError(LLMError):
    """Raised when unable to connect to the LLM provider."""

    pass


class LLMAuthenticationError(LLMError):
    """Raised when authentication with the LLM provider fails."""

    pass


class LLMRateLimitError(LLMError):
    """Raised when rate limited by the LLM provider."""

    pass


class LLMTimeoutError(LLMError):
    """Raised when the LLM provider does not answer within the timeout."""

    pass


class LLMContextWindowError(LLMError):
    """Raised when the prompt exceeds the model's context or token quota."""

    pass


class LLMClient:
    """Completion client for a single provider/model pair via LiteLLM.

    Instances hold only construction-time settings and can be shared
    across concurrent requests.
    """

    def __init__(
        self,
        provider: str,
        model: str,
        api_key: str | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        log_path: Path | None = None,
    ):
        """Initialize LLM client.

        Args:
            provider: LLM provider (groq, openai, anthropic, ...).
            model: Model name.
            api_key: Optional API key (uses env var if not provided).
            timeout: Seconds before a single call is abandoned.
            log_path: Optional path to JSONL log file for query logging.
        """
        self.provider = provider
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        self.log_path = log_path

    def _log_query(
        self,
        system_prompt: str | None,
        prompt: str,
        temperature: float,
        max_tokens: int,
        response: str | None,
        duration_ms: int,
        error: str | None,
        error_details: dict | None = None,
    ) -> None:
        """Append one query record to the JSONL log file, if configured."""
        if not self.log_path:
            return

        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "provider": self.provider,
            "model": self.model,
            "request": {
                "system_prompt": system_prompt,
                "prompt": prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "timeout": self.timeout,
            },
            "response": response,
            "duration_ms": duration_ms,
            "error": error,
        }

        if error_details:
            entry["error_details"] = error_details

        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry) + "\n")
        except OSError:
            # Don't let logging failures break the application
            pass

    def _extract_error_details(self, e: Exception) -> dict | None:
        """Extract HTTP details from LiteLLM exceptions.

        Args:
            e: The exception to extract details from.

        Returns:
            Dict with status_code, retry hints and provider if available.
        """
        details: dict = {}

        if hasattr(e, "status_code"):
            details["status_code"] = e.status_code

        response = getattr(e, "response", None)
        headers = getattr(response, "headers", None)
        if headers is not None:
            relevant_headers = {
                k: v
                for k, v in dict(headers).items()
                if k.lower().startswith("x-ratelimit-")
                or k.lower() in ("retry-after", "x-request-id")
            }
            if relevant_headers:
                details["response_headers"] = relevant_headers

        if hasattr(e, "llm_provider"):
            details["llm_provider"] = e.llm_provider

        return details if details else None

    def _get_model_string(self) -> str:
        """Get LiteLLM model string.

        Returns:
            Model string in provider/model format.
        """
        if self.provider == "openai":
            return self.model  # OpenAI is default
        return f"{self.provider}/{self.model}"

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
    ) -> str:
        """Generate completion from prompt.

        Args:
            prompt: User prompt.
            system_prompt: Optional system prompt.
            temperature: Sampling temperature.
            max_tokens: Maximum response tokens.

        Returns:
            Generated text, or an empty string if the provider returned no content.

        Raises:
            LLMError: Or one of its subclasses, on any provider failure.
        """
        messages = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": prompt})

        kwargs = {
            "model": self._get_model_string(),
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "timeout": self.timeout,
            # Retries across models are handled by FallbackCompleter
            "num_retries": 0,
        }

        if self.api_key:
            kwargs["api_key"] = self.api_key

        start_time = time.perf_counter()
        try:
            response = await acompletion(**kwargs)
            result = ""
            if response.choices:
                result = str(response.choices[0].message.content or "")
        except Timeout as e:
            self._log_failure(system_prompt, prompt, temperature, max_tokens, start_time, e)
            raise LLMTimeoutError(f"Request timeout: {e}") from e
        except AuthenticationError as e:
            self._log_failure(system_prompt, prompt, temperature, max_tokens, start_time, e)
            raise LLMAuthenticationError(f"Authentication failed: {e}") from e
        except RateLimitError as e:
            self._log_failure(system_prompt, prompt, temperature, max_tokens, start_time, e)
            raise LLMRateLimitError(f"Rate limit exceeded: {e}") from e
        except ContextWindowExceededError as e:
            self._log_failure(system_prompt, prompt, temperature, max_tokens, start_time, e)
            raise LLMContextWindowError(f"Request too large: {e}") from e
        except APIConnectionError as e:
            self._log_failure(system_prompt, prompt, temperature, max_tokens, start_time, e)
            raise LLMConnectionError(f"Connection failed: {e}") from e
        except APIError as e:
            self._log_failure(system_prompt, prompt, temperature, max_tokens, start_time, e)
            raise LLMError(f"LLM API error: {e}") from e

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        self._log_query(
            system_prompt,
            prompt,
            temperature,
            max_tokens,
            response=result,
            duration_ms=duration_ms,
            error=None,
        )
        return result

    def _log_failure(
        self,
        system_prompt: str | None,
        prompt: str,
        temperature: float,
        max_tokens: int,
        start_time: float,
        e: Exception,
    ) -> None:
        duration_ms = int((time.perf_counter() - start_time) * 1000)
        self._log_query(
            system_prompt,
            prompt,
            temperature,
            max_tokens,
            response=None,
            duration_ms=duration_ms,
            error=str(e),
            error_details=self._extract_error_details(e),
        )
