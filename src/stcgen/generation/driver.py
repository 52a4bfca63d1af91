"""Run one streamed model call and write its output as a manifest."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from stcgen.constants import ChunkType
from stcgen.generation.schemas import GenerationRequest, UsageAccumulator
from stcgen.llm.client import ModelClient

logger = logging.getLogger(__name__)


async def generate_manifest(
    client: ModelClient,
    request: GenerationRequest,
    output_path: Path,
    usage: UsageAccumulator,
) -> str:
    """Stream a completion into *output_path* and fold usage into *usage*.

    Text chunks are concatenated in arrival order; usage chunks are added
    to the shared accumulator; any other chunk is ignored. The file is
    written once, after the stream is exhausted, replacing any previous
    content. Stream and write errors propagate.
    """
    parts: list[str] = []
    usage.record_call()
    async for chunk in client.create_message(
        request.system_prompt, request.messages
    ):
        chunk_type = getattr(chunk, "type", None)
        if chunk_type == ChunkType.TEXT:
            parts.append(chunk.text)  # type: ignore[union-attr]
        elif chunk_type == ChunkType.USAGE:
            usage.add(chunk)  # type: ignore[arg-type]

    content = "".join(parts)
    await asyncio.to_thread(_write_manifest, output_path, content)
    logger.info(
        "event=manifest_written path=%s chars=%d", output_path, len(content)
    )
    return content


def _write_manifest(path: Path, content: str) -> None:
    # newline="" keeps the model's line endings byte-for-byte.
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
