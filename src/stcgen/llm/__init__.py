"""Generative model client abstraction and its LiteLLM implementation."""

from stcgen.llm.client import LiteLLMClient, ModelClient, build_model_client
from stcgen.llm.schemas import (
    ChatMessage,
    ReasoningChunk,
    StreamChunk,
    TextChunk,
    UsageChunk,
)

__all__ = [
    "ChatMessage",
    "LiteLLMClient",
    "ModelClient",
    "ReasoningChunk",
    "StreamChunk",
    "TextChunk",
    "UsageChunk",
    "build_model_client",
]
