"""Streamed response chunks and chat messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from stcgen.constants import ChunkType, MessageRole


@dataclass(frozen=True)
class ChatMessage:
    """One role-tagged message sent to the model."""

    role: MessageRole
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": str(self.role), "content": self.content}


@dataclass(frozen=True)
class TextChunk:
    """A fragment of generated text."""

    text: str
    type: Literal[ChunkType.TEXT] = ChunkType.TEXT


@dataclass(frozen=True)
class UsageChunk:
    """Token usage (and cost, when the model is priced) for one call."""

    input_tokens: int
    output_tokens: int
    total_cost: float | None = None
    type: Literal[ChunkType.USAGE] = ChunkType.USAGE


@dataclass(frozen=True)
class ReasoningChunk:
    """A fragment of model reasoning; never written to a manifest."""

    text: str
    type: Literal[ChunkType.REASONING] = ChunkType.REASONING


StreamChunk = TextChunk | UsageChunk | ReasoningChunk
