"""Manifest generation: prompts, streamed model calls, orchestration."""

from stcgen.generation.orchestrator import generate_structure_yaml_recursively
from stcgen.generation.schemas import (
    GenerationRequest,
    GenerationResult,
    UsageAccumulator,
    UsageTotals,
)

__all__ = [
    "GenerationRequest",
    "GenerationResult",
    "UsageAccumulator",
    "UsageTotals",
    "generate_structure_yaml_recursively",
]
