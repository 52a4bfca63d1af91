"""Generate the root manifest, then one manifest per first-level subdirectory."""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from stcgen.analysis.definitions import extract_definitions
from stcgen.config import Settings
from stcgen.constants import ERROR_TRUNCATION_CHARS
from stcgen.generation.driver import generate_manifest
from stcgen.generation.prompt_builder import (
    build_directory_request,
    build_root_request,
)
from stcgen.generation.schemas import GenerationResult, UsageAccumulator
from stcgen.ingestion.collector import FileLister, collect_files
from stcgen.ingestion.file_lister import list_files
from stcgen.llm.client import ModelClient, build_model_client
from stcgen.manifest_template import MANIFEST_TEMPLATE
from stcgen.resilience.errors import classify_error, is_retryable

logger = logging.getLogger(__name__)

DefinitionExtractor = Callable[[Path], Any]


async def generate_structure_yaml_recursively(
    root_path: str | Path,
    settings: Settings | None = None,
    *,
    client: ModelClient | None = None,
    extractor: DefinitionExtractor | None = None,
    lister: FileLister = list_files,
) -> GenerationResult:
    """Write a manifest for *root_path* and each of its direct subdirectories.

    Steps run strictly in order, one model call at a time:

    1. build the model client (unless *client* is given);
    2. extract the root's definitions;
    3. list and describe every file under the root;
    4. generate the root manifest;
    5. for each first-level subdirectory, extract its definitions and
       generate its manifest from the analysis scoped to it.

    Usage from every call is summed into one accumulator. Any failure
    is logged and re-raised; manifests written before it stay on disk.
    Deeper levels are documented by running this again with a
    subdirectory as the root.
    """
    cfg = settings if settings is not None else Settings()
    root = Path(root_path).expanduser().resolve()
    model_client = client if client is not None else build_model_client(cfg)
    extract = extractor or functools.partial(
        extract_definitions, max_files=cfg.max_definition_files
    )
    usage = UsageAccumulator()
    manifests: list[str] = []
    current = root

    try:
        definitions = await asyncio.to_thread(extract, root)
        collected = await asyncio.to_thread(
            functools.partial(
                collect_files, root, lister=lister, limit=cfg.max_listed_files
            )
        )

        root_manifest = root / cfg.manifest_filename
        request = build_root_request(
            definitions,
            collected.analysis,
            MANIFEST_TEMPLATE,
            root,
            manifest_filename=cfg.manifest_filename,
        )
        await generate_manifest(model_client, request, root_manifest, usage)
        manifests.append(str(root_manifest))

        for directory in first_level_directories(collected.directories, root):
            current = directory
            dir_definitions = await asyncio.to_thread(extract, directory)
            request = build_directory_request(
                dir_definitions,
                collected.analysis,
                MANIFEST_TEMPLATE,
                root,
                directory,
                manifest_filename=cfg.manifest_filename,
            )
            manifest = directory / cfg.manifest_filename
            await generate_manifest(model_client, request, manifest, usage)
            manifests.append(str(manifest))
    except Exception as exc:
        logger.error(
            "event=generation_failed directory=%s error_class=%s "
            "retryable=%s manifests_written=%d error=%s",
            current,
            classify_error(exc).value,
            is_retryable(exc),
            len(manifests),
            str(exc)[:ERROR_TRUNCATION_CHARS],
        )
        raise

    totals = usage.snapshot()
    logger.info(
        "event=generation_complete root=%s manifests=%d calls=%d "
        "input_tokens=%d output_tokens=%d cost=%.6f",
        root,
        len(manifests),
        totals.call_count,
        totals.input_tokens,
        totals.output_tokens,
        totals.total_cost,
    )
    return GenerationResult(
        success=True,
        message=(
            f"{cfg.manifest_filename} generation complete "
            f"({len(manifests)} manifests)"
        ),
        path=str(root / cfg.manifest_filename),
        total_input_tokens=totals.input_tokens,
        total_output_tokens=totals.output_tokens,
        total_cost=totals.total_cost,
        manifests=tuple(manifests),
    )


def first_level_directories(
    directories: Iterable[str], root: Path
) -> list[Path]:
    """Directory entries whose parent is *root*, in listing order.

    Hidden directories are excluded. Entries resolving to the root or
    to a directory already selected are dropped, so each real directory
    gets exactly one manifest.
    """
    seen: set[Path] = {root.resolve()}
    result: list[Path] = []
    for entry in directories:
        path = Path(entry)
        if path.parent != root or path.name.startswith("."):
            continue
        real = path.resolve()
        if real in seen:
            continue
        seen.add(real)
        result.append(path)
    return result
