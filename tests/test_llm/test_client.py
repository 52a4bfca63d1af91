"""Tests for the LiteLLM streaming client (litellm is mocked)."""

from __future__ import annotations

from collections.abc import AsyncIterator
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from litellm.exceptions import RateLimitError as LitellmRateLimitError
from tenacity import wait_none

from stcgen.config import Settings
from stcgen.constants import MessageRole
from stcgen.llm.client import (
    LiteLLMClient,
    _api_key_for,
    _open_stream,
    build_model_client,
)
from stcgen.llm.schemas import (
    ChatMessage,
    ReasoningChunk,
    TextChunk,
    UsageChunk,
)

MESSAGES = (ChatMessage(role=MessageRole.USER, content="describe src"),)


def _part(
    content: str | None = None,
    reasoning: str | None = None,
    usage: Any = None,
) -> SimpleNamespace:
    """Build one fake streamed chunk shaped like a LiteLLM delta."""
    choices = []
    if content is not None or reasoning is not None:
        delta = SimpleNamespace(content=content, reasoning_content=reasoning)
        choices = [SimpleNamespace(delta=delta)]
    return SimpleNamespace(choices=choices, usage=usage)


def _stream(*parts: SimpleNamespace) -> AsyncIterator[SimpleNamespace]:
    async def gen() -> AsyncIterator[SimpleNamespace]:
        for part in parts:
            yield part

    return gen()


async def _collect(client: LiteLLMClient) -> list[object]:
    return [chunk async for chunk in client.create_message("sys", MESSAGES)]


def _settings(**overrides: Any) -> Settings:
    base: dict[str, Any] = {
        "litellm_model": "openai/gpt-4o-mini",
        "openai_api_key": "sk-test",
        "anthropic_api_key": "ak-test",
    }
    base.update(overrides)
    return Settings(**base)


class TestStreaming:
    @pytest.mark.asyncio
    async def test_yields_text_reasoning_and_final_usage(self) -> None:
        usage = SimpleNamespace(prompt_tokens=120, completion_tokens=30)
        stream = _stream(
            _part(reasoning="planning"),
            _part(content="name: "),
            _part(content="demo\n"),
            _part(usage=usage),
        )
        with (
            patch(
                "stcgen.llm.client._acompletion",
                new=AsyncMock(return_value=stream),
            ),
            patch(
                "stcgen.llm.client.litellm.cost_per_token",
                return_value=(0.001, 0.002),
            ),
        ):
            chunks = await _collect(LiteLLMClient(_settings()))

        assert chunks == [
            ReasoningChunk(text="planning"),
            TextChunk(text="name: "),
            TextChunk(text="demo\n"),
            UsageChunk(
                input_tokens=120,
                output_tokens=30,
                total_cost=pytest.approx(0.003),
            ),
        ]

    @pytest.mark.asyncio
    async def test_request_shape(self) -> None:
        mock = AsyncMock(return_value=_stream())
        with patch("stcgen.llm.client._acompletion", new=mock):
            await _collect(LiteLLMClient(_settings(llm_timeout_seconds=30)))

        kwargs = mock.call_args.kwargs
        assert kwargs["model"] == "openai/gpt-4o-mini"
        assert kwargs["messages"] == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "describe src"},
        ]
        assert kwargs["stream"] is True
        assert kwargs["stream_options"] == {"include_usage": True}
        assert kwargs["timeout"] == 30
        assert kwargs["api_key"] == "sk-test"

    @pytest.mark.asyncio
    async def test_no_usage_reported(self) -> None:
        stream = _stream(_part(content="a: 1\n"))
        with patch(
            "stcgen.llm.client._acompletion",
            new=AsyncMock(return_value=stream),
        ):
            chunks = await _collect(LiteLLMClient(_settings()))
        assert chunks == [TextChunk(text="a: 1\n")]

    @pytest.mark.asyncio
    async def test_unpriced_model_has_no_cost(self) -> None:
        usage = SimpleNamespace(prompt_tokens=5, completion_tokens=2)
        stream = _stream(_part(content="x"), _part(usage=usage))
        with (
            patch(
                "stcgen.llm.client._acompletion",
                new=AsyncMock(return_value=stream),
            ),
            patch(
                "stcgen.llm.client.litellm.cost_per_token",
                side_effect=Exception("model not mapped"),
            ),
        ):
            chunks = await _collect(LiteLLMClient(_settings()))
        assert chunks[-1] == UsageChunk(
            input_tokens=5, output_tokens=2, total_cost=None
        )

    @pytest.mark.asyncio
    async def test_empty_choices_skipped(self) -> None:
        stream = _stream(
            SimpleNamespace(choices=[], usage=None),
            _part(content=""),
            _part(content="ok"),
        )
        with patch(
            "stcgen.llm.client._acompletion",
            new=AsyncMock(return_value=stream),
        ):
            chunks = await _collect(LiteLLMClient(_settings()))
        assert chunks == [TextChunk(text="ok")]

    @pytest.mark.asyncio
    async def test_mid_stream_error_propagates(self) -> None:
        async def broken() -> AsyncIterator[SimpleNamespace]:
            yield _part(content="partial")
            raise ConnectionError("socket closed")

        with patch(
            "stcgen.llm.client._acompletion",
            new=AsyncMock(return_value=broken()),
        ):
            client = LiteLLMClient(_settings())
            received: list[object] = []
            with pytest.raises(ConnectionError, match="socket closed"):
                async for chunk in client.create_message("sys", MESSAGES):
                    received.append(chunk)
        assert received == [TextChunk(text="partial")]


class TestRateLimitRetry:
    @pytest.fixture(autouse=True)
    def _disable_retry_wait(self) -> Any:
        """Disable tenacity wait time for fast tests."""
        original_wait = _open_stream.retry.wait  # type: ignore[attr-defined]
        _open_stream.retry.wait = wait_none()  # type: ignore[attr-defined]
        yield
        _open_stream.retry.wait = original_wait  # type: ignore[attr-defined]

    @staticmethod
    def _rate_error() -> LitellmRateLimitError:
        return LitellmRateLimitError(
            message="Rate limit exceeded",
            model="test",
            llm_provider="openai",
        )

    @pytest.mark.asyncio
    async def test_retries_then_streams(self) -> None:
        mock = AsyncMock(
            side_effect=[
                self._rate_error(),
                self._rate_error(),
                _stream(_part(content="done")),
            ]
        )
        with patch("stcgen.llm.client._acompletion", new=mock):
            chunks = await _collect(LiteLLMClient(_settings()))
        assert chunks == [TextChunk(text="done")]
        # 2 retries + 1 success
        assert mock.call_count == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self) -> None:
        mock = AsyncMock(side_effect=self._rate_error())
        with patch("stcgen.llm.client._acompletion", new=mock):
            with pytest.raises(LitellmRateLimitError):
                await _collect(LiteLLMClient(_settings()))
        assert mock.call_count == 3

    @pytest.mark.asyncio
    async def test_other_errors_not_retried(self) -> None:
        mock = AsyncMock(side_effect=ValueError("bad request"))
        with patch("stcgen.llm.client._acompletion", new=mock):
            with pytest.raises(ValueError):
                await _collect(LiteLLMClient(_settings()))
        assert mock.call_count == 1


class TestApiKeySelection:
    def test_openai_model_uses_openai_key(self) -> None:
        assert _api_key_for(_settings()) == "sk-test"

    def test_anthropic_model_uses_anthropic_key(self) -> None:
        settings = _settings(litellm_model="anthropic/claude-3-5-haiku")
        assert _api_key_for(settings) == "ak-test"

    def test_other_provider_defers_to_litellm(self) -> None:
        settings = _settings(litellm_model="ollama/llama3")
        assert _api_key_for(settings) is None

    def test_empty_key_is_none(self) -> None:
        settings = _settings(openai_api_key="")
        assert _api_key_for(settings) is None


def test_build_model_client_uses_settings() -> None:
    client = build_model_client(_settings(litellm_model="anthropic/claude-3-5-haiku"))
    assert isinstance(client, LiteLLMClient)
    assert client.model == "anthropic/claude-3-5-haiku"
