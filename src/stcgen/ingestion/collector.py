"""Enumerate a source tree and describe every file in it."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from types import MappingProxyType

from stcgen.constants import MAX_LISTED_FILES
from stcgen.ingestion.file_analyzer import analyze_file
from stcgen.ingestion.file_lister import list_files
from stcgen.ingestion.schemas import CollectedFiles

logger = logging.getLogger(__name__)

FileLister = Callable[[str, bool, int], tuple[list[str], bool]]


def collect_files(
    root: str | Path,
    *,
    lister: FileLister = list_files,
    limit: int = MAX_LISTED_FILES,
) -> CollectedFiles:
    """List everything under *root* and build the file-analysis mapping.

    Entries ending with a path separator are directories. Dotfiles are
    dropped before analysis; every other file is described with
    :func:`analyze_file` and keyed by its listed path.
    """
    entries, limit_reached = lister(str(root), True, limit)
    if limit_reached:
        logger.info(
            "event=listing_truncated root=%s limit=%d", root, limit
        )

    files: list[str] = []
    directories: list[str] = []
    for entry in entries:
        if is_directory_entry(entry):
            directories.append(entry)
        else:
            files.append(entry)

    analysis: dict[str, str] = {}
    for file_path in files:
        if is_dotfile(file_path):
            continue
        analysis[file_path] = analyze_file(file_path)

    logger.debug(
        "event=files_collected root=%s files=%d directories=%d analyzed=%d",
        root,
        len(files),
        len(directories),
        len(analysis),
    )
    return CollectedFiles(
        entries=tuple(entries),
        files=tuple(files),
        directories=tuple(directories),
        analysis=MappingProxyType(analysis),
        limit_reached=limit_reached,
    )


def is_directory_entry(entry: str) -> bool:
    """True for listing entries marked as directories (trailing separator)."""
    return entry.endswith(("/", os.sep))


def is_dotfile(entry: str) -> bool:
    """True when the entry's own name starts with a dot."""
    name = entry.rstrip("/" + os.sep).replace(os.sep, "/").rsplit("/", 1)[-1]
    return name.startswith(".")
