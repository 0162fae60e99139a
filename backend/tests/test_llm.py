# backend/tests/test_llm.py
"""LLM client tests."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from litellm.exceptions import AuthenticationError, RateLimitError, Timeout

from docchat.llm import (
    LLMAuthenticationError,
    LLMClient,
    LLMRateLimitError,
    LLMTimeoutError,
)


def _response(content):
    return MagicMock(choices=[MagicMock(message=MagicMock(content=content))])


@pytest.fixture
def mock_completion():
    """Mock litellm completion response."""
    with patch("docchat.llm.client.acompletion", new_callable=AsyncMock) as mock:
        mock.return_value = _response("Test response")
        yield mock


async def test_llm_client_generates_response(mock_completion):
    """LLM client generates response from prompt."""
    client = LLMClient(provider="groq", model="llama-3.1-8b-instant")

    response = await client.generate("Test prompt")

    assert response == "Test response"
    mock_completion.assert_called_once()


async def test_llm_client_uses_provider_prefixed_model(mock_completion):
    """LLM client prefixes non-OpenAI models with the provider."""
    client = LLMClient(provider="groq", model="gemma-7b-it")

    await client.generate("Test")

    assert mock_completion.call_args.kwargs["model"] == "groq/gemma-7b-it"


async def test_llm_client_openai_model_unprefixed(mock_completion):
    client = LLMClient(provider="openai", model="gpt-4o-mini")

    await client.generate("Test")

    assert mock_completion.call_args.kwargs["model"] == "gpt-4o-mini"


async def test_llm_client_passes_system_prompt(mock_completion):
    """LLM client includes system prompt in messages."""
    client = LLMClient(provider="groq", model="llama-3.1-8b-instant")

    await client.generate("User message", system_prompt="You are a helpful assistant")

    messages = mock_completion.call_args.kwargs["messages"]
    assert messages == [
        {"role": "system", "content": "You are a helpful assistant"},
        {"role": "user", "content": "User message"},
    ]


async def test_llm_client_passes_limits_and_timeout(mock_completion):
    """Temperature, max tokens, timeout and api key reach LiteLLM."""
    client = LLMClient(provider="groq", model="m", api_key="gsk-test", timeout=12.5)

    await client.generate("Test", temperature=0.5, max_tokens=4000)

    kwargs = mock_completion.call_args.kwargs
    assert kwargs["temperature"] == 0.5
    assert kwargs["max_tokens"] == 4000
    assert kwargs["timeout"] == 12.5
    assert kwargs["api_key"] == "gsk-test"
    assert kwargs["num_retries"] == 0


async def test_llm_client_returns_empty_string_for_missing_content(mock_completion):
    mock_completion.return_value = _response(None)
    client = LLMClient(provider="groq", model="m")

    assert await client.generate("Test") == ""


async def test_llm_client_returns_empty_string_for_no_choices(mock_completion):
    mock_completion.return_value = MagicMock(choices=[])
    client = LLMClient(provider="groq", model="m")

    assert await client.generate("Test") == ""


async def test_llm_client_raises_authentication_error():
    """LLM client raises LLMAuthenticationError on auth failure."""
    with patch("docchat.llm.client.acompletion", new_callable=AsyncMock) as mock:
        mock.side_effect = AuthenticationError(
            message="Invalid API key",
            llm_provider="groq",
            model="llama-3.1-8b-instant",
        )
        client = LLMClient(provider="groq", model="llama-3.1-8b-instant")

        with pytest.raises(LLMAuthenticationError) as exc_info:
            await client.generate("Test")

        assert "Authentication failed" in str(exc_info.value)


async def test_llm_client_raises_rate_limit_error():
    """LLM client raises LLMRateLimitError on rate limit."""
    with patch("docchat.llm.client.acompletion", new_callable=AsyncMock) as mock:
        mock.side_effect = RateLimitError(
            message="Rate limit exceeded",
            llm_provider="groq",
            model="llama-3.1-8b-instant",
        )
        client = LLMClient(provider="groq", model="llama-3.1-8b-instant")

        with pytest.raises(LLMRateLimitError) as exc_info:
            await client.generate("Test")

        assert "Rate limit exceeded" in str(exc_info.value)


async def test_llm_client_raises_timeout_error():
    """LLM client raises LLMTimeoutError when the provider is too slow."""
    with patch("docchat.llm.client.acompletion", new_callable=AsyncMock) as mock:
        mock.side_effect = Timeout(
            message="Request timed out",
            model="llama-3.1-8b-instant",
            llm_provider="groq",
        )
        client = LLMClient(provider="groq", model="llama-3.1-8b-instant")

        with pytest.raises(LLMTimeoutError) as exc_info:
            await client.generate("Test")

        assert "Request timeout" in str(exc_info.value)


async def test_llm_client_writes_query_log(mock_completion, tmp_path):
    """Each call appends one JSON line when a log path is set."""
    log_path = tmp_path / "logs" / "llm-queries.jsonl"
    client = LLMClient(provider="groq", model="m", log_path=log_path)

    await client.generate("Question?", system_prompt="System")

    entries = [json.loads(line) for line in log_path.read_text().splitlines()]
    assert len(entries) == 1
    assert entries[0]["model"] == "m"
    assert entries[0]["request"]["prompt"] == "Question?"
    assert entries[0]["response"] == "Test response"
    assert entries[0]["error"] is None


async def test_llm_client_logs_failures(tmp_path):
    log_path = tmp_path / "llm.jsonl"
    with patch("docchat.llm.client.acompletion", new_callable=AsyncMock) as mock:
        mock.side_effect = RateLimitError(
            message="Rate limit exceeded", llm_provider="groq", model="m"
        )
        client = LLMClient(provider="groq", model="m", log_path=log_path)

        with pytest.raises(LLMRateLimitError):
            await client.generate("Test")

    entry = json.loads(log_path.read_text())
    assert entry["response"] is None
    assert "Rate limit exceeded" in entry["error"]
