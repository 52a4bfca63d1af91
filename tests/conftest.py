"""Shared test fixtures: stub model client, sample project trees."""

import os

# Force demo API keys for all tests; no real LLM calls.
# These are set unconditionally at import time, so even if you have
# real keys in your shell environment, pytest overwrites them before
# any Settings() is created.
os.environ["ANTHROPIC_API_KEY"] = "for-demo-purposes-only"
os.environ["OPENAI_API_KEY"] = "for-demo-purposes-only"

import shutil
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass
from pathlib import Path

import pytest

from stcgen.llm.schemas import (
    ChatMessage,
    ReasoningChunk,
    StreamChunk,
    TextChunk,
    UsageChunk,
)

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures" / "sample_project"


@dataclass(frozen=True)
class RecordedCall:
    """One create_message invocation seen by the stub client."""

    system_prompt: str
    messages: tuple[ChatMessage, ...]

    @property
    def user_content(self) -> str:
        return self.messages[0].content


class StubModelClient:
    """Deterministic model client yielding a fixed chunk sequence per call.

    ``fail_on_call`` (1-based) makes that call raise ``error`` after the
    first text chunk, to exercise mid-stream failures.
    """

    def __init__(
        self,
        chunks: Sequence[object] | None = None,
        *,
        fail_on_call: int | None = None,
        error: Exception | None = None,
    ) -> None:
        self.chunks: list[object] = list(
            chunks
            if chunks is not None
            else [
                TextChunk(text="name: sample\n"),
                ReasoningChunk(text="thinking about files"),
                TextChunk(text="status: implemented\n"),
                UsageChunk(
                    input_tokens=100, output_tokens=50, total_cost=0.01
                ),
            ]
        )
        self.fail_on_call = fail_on_call
        self.error = error or RuntimeError("model stream broke")
        self.calls: list[RecordedCall] = []

    async def create_message(
        self,
        system_prompt: str,
        messages: Sequence[ChatMessage],
    ) -> AsyncIterator[StreamChunk]:
        self.calls.append(RecordedCall(system_prompt, tuple(messages)))
        call_number = len(self.calls)
        for index, chunk in enumerate(self.chunks):
            if call_number == self.fail_on_call and index == 1:
                raise self.error
            yield chunk  # type: ignore[misc]


@pytest.fixture
def stub_client() -> StubModelClient:
    return StubModelClient()


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """A writable copy of the sample project fixture."""
    target = tmp_path / "sample_project"
    shutil.copytree(FIXTURE_DIR, target)
    return target


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create *files* (relative path → content) under *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root
