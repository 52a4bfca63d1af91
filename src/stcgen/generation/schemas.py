"""Requests, usage accounting and results of manifest generation."""

from __future__ import annotations

from dataclasses import dataclass, field

from stcgen.llm.schemas import ChatMessage, UsageChunk


@dataclass(frozen=True)
class GenerationRequest:
    """System prompt plus the ordered messages for one directory."""

    system_prompt: str
    messages: tuple[ChatMessage, ...]


@dataclass(frozen=True)
class UsageTotals:
    """Immutable snapshot of a :class:`UsageAccumulator`."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_cost: float = 0.0
    call_count: int = 0


@dataclass
class UsageAccumulator:
    """Run-scoped token and cost counters shared by every model call.

    Totals only ever grow: negative usage is rejected.
    """

    input_tokens: int = 0
    output_tokens: int = 0
    total_cost: float = 0.0
    call_count: int = 0

    def add(self, usage: UsageChunk) -> None:
        cost = usage.total_cost or 0.0
        if usage.input_tokens < 0 or usage.output_tokens < 0 or cost < 0:
            msg = (
                "usage must be non-negative, got "
                f"input={usage.input_tokens} output={usage.output_tokens} "
                f"cost={cost}"
            )
            raise ValueError(msg)
        self.input_tokens += usage.input_tokens
        self.output_tokens += usage.output_tokens
        self.total_cost += cost

    def record_call(self) -> None:
        self.call_count += 1

    def snapshot(self) -> UsageTotals:
        return UsageTotals(
            input_tokens=self.input_tokens,
            output_tokens=self.output_tokens,
            total_cost=self.total_cost,
            call_count=self.call_count,
        )


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a full run: root manifest path and usage totals."""

    success: bool
    message: str
    path: str
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    total_cost: float = 0.0
    manifests: tuple[str, ...] = field(default_factory=tuple)
