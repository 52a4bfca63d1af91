"""Streaming model client backed by LiteLLM."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable, Coroutine, Sequence
from typing import TYPE_CHECKING, Any, Protocol

import litellm
from litellm.exceptions import RateLimitError as LitellmRateLimitError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from stcgen.config import Settings
from stcgen.constants import (
    RETRY_INITIAL_WAIT,
    RETRY_MAX_ATTEMPTS,
    RETRY_MAX_WAIT,
)
from stcgen.llm.schemas import (
    ChatMessage,
    ReasoningChunk,
    StreamChunk,
    TextChunk,
    UsageChunk,
)

logger = logging.getLogger(__name__)

# litellm stubs have partially unknown types, hence the typed alias
if TYPE_CHECKING:
    _acompletion: Callable[..., Coroutine[Any, Any, Any]]
else:
    _acompletion = litellm.acompletion


class ModelClient(Protocol):
    """Anything that can stream a chat completion as tagged chunks."""

    def create_message(
        self,
        system_prompt: str,
        messages: Sequence[ChatMessage],
    ) -> AsyncIterator[StreamChunk]: ...


@retry(
    stop=stop_after_attempt(RETRY_MAX_ATTEMPTS),
    wait=wait_exponential_jitter(
        initial=RETRY_INITIAL_WAIT, max=RETRY_MAX_WAIT
    ),
    retry=retry_if_exception_type(LitellmRateLimitError),
    reraise=True,
)
async def _open_stream(**kwargs: Any) -> Any:
    """Open a completion stream, retrying rate limits before any chunk flows."""
    return await _acompletion(**kwargs)


class LiteLLMClient:
    """Streams completions from any LiteLLM-supported provider.

    Yields :class:`TextChunk` for content deltas, :class:`ReasoningChunk`
    for reasoning deltas and one final :class:`UsageChunk` when the
    provider reports usage. Errors raised while the stream is being
    consumed propagate unchanged.
    """

    def __init__(self, settings: Settings) -> None:
        self.model = settings.litellm_model
        self._timeout = settings.llm_timeout_seconds
        self._max_tokens = settings.llm_max_output_tokens
        self._temperature = settings.llm_temperature
        self._api_key = _api_key_for(settings)

    async def create_message(
        self,
        system_prompt: str,
        messages: Sequence[ChatMessage],
    ) -> AsyncIterator[StreamChunk]:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                *(m.to_dict() for m in messages),
            ],
            "stream": True,
            "stream_options": {"include_usage": True},
            "timeout": self._timeout,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }
        if self._api_key:
            kwargs["api_key"] = self._api_key

        stream: Any = await _open_stream(**kwargs)
        usage: Any = None
        async for part in stream:
            choices = getattr(part, "choices", None) or []
            if choices:
                delta = getattr(choices[0], "delta", None)
                reasoning = getattr(delta, "reasoning_content", None)
                if reasoning:
                    yield ReasoningChunk(text=str(reasoning))
                content = getattr(delta, "content", None)
                if content:
                    yield TextChunk(text=str(content))
            part_usage = getattr(part, "usage", None)
            if part_usage is not None:
                usage = part_usage

        if usage is None:
            logger.debug("event=usage_missing model=%s", self.model)
            return

        input_tokens = int(getattr(usage, "prompt_tokens", 0) or 0)
        output_tokens = int(getattr(usage, "completion_tokens", 0) or 0)
        yield UsageChunk(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_cost=self._cost(input_tokens, output_tokens),
        )

    def _cost(self, input_tokens: int, output_tokens: int) -> float | None:
        """USD cost from LiteLLM's price map; None for unpriced models."""
        try:
            prompt_cost, completion_cost = litellm.cost_per_token(
                model=self.model,
                prompt_tokens=input_tokens,
                completion_tokens=output_tokens,
            )
        except Exception:  # noqa: BLE001
            logger.debug("event=cost_unavailable model=%s", self.model)
            return None
        return float(prompt_cost) + float(completion_cost)


def _api_key_for(settings: Settings) -> str | None:
    """Pick the configured key matching the model's provider prefix."""
    provider = settings.litellm_model.split("/", 1)[0].lower()
    if provider == "anthropic":
        return settings.anthropic_api_key or None
    if provider == "openai":
        return settings.openai_api_key or None
    return None


def build_model_client(settings: Settings) -> ModelClient:
    """Construct the model client for a run."""
    return LiteLLMClient(settings)
