"""Bounded breadth-first listing of a source tree."""

from __future__ import annotations

import logging
import os
from collections import deque
from pathlib import Path

import pathspec

from stcgen.config import SKIP_DIRECTORIES
from stcgen.constants import MAX_LISTED_FILES

logger = logging.getLogger(__name__)


def list_files(
    root: str | Path,
    recursive: bool = True,
    limit: int = MAX_LISTED_FILES,
) -> tuple[list[str], bool]:
    """List paths under *root*, at most *limit* of them.

    Returns ``(entries, limit_reached)``. Entries are absolute path
    strings in breadth-first order, sorted by name within each
    directory; directory entries end with ``os.sep``. ``limit_reached``
    means entries were left out: a tree of exactly *limit* entries is
    listed in full and reports False.

    * Hidden directories and :data:`SKIP_DIRECTORIES` are omitted
      along with everything beneath them.
    * Paths matched by the root ``.gitignore`` are omitted.
    * Symlinked directories are not followed or listed; symlinked
      files resolving outside the root are omitted.
    * Listing ``/`` or the home directory yields just the root.

    Raises :class:`FileNotFoundError` if *root* is not a directory.
    """
    base = Path(root).expanduser().resolve()
    if not base.is_dir():
        msg = f"Directory does not exist: {base}"
        raise FileNotFoundError(msg)

    if _is_protected_root(base):
        logger.warning("event=listing_refused root=%s", base)
        return [_as_dir_entry(base)], False

    gitignore_spec = _load_gitignore(base)
    entries: list[str] = []
    queue: deque[Path] = deque([base])

    while queue:
        current = queue.popleft()
        for item in _children(current, is_root=current == base):
            if item.is_symlink() and (
                item.is_dir() or not item.resolve().is_relative_to(base)
            ):
                continue
            rel = item.relative_to(base).as_posix()
            is_dir = item.is_dir()
            if is_dir:
                if item.name.startswith(".") or item.name in SKIP_DIRECTORIES:
                    continue
                if gitignore_spec.match_file(rel + "/"):
                    continue
            elif not item.is_file() or gitignore_spec.match_file(rel):
                continue

            if len(entries) >= limit:
                return entries, True
            entries.append(_as_dir_entry(item) if is_dir else str(item))

            if is_dir and recursive:
                queue.append(item)

    return entries, False


def _children(directory: Path, *, is_root: bool) -> list[Path]:
    """Sorted directory contents; unreadable subdirectories are skipped."""
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except PermissionError:
        if is_root:
            raise
        logger.warning("event=directory_unreadable path=%s", directory)
        return []


def _as_dir_entry(path: Path) -> str:
    return str(path).rstrip(os.sep) + os.sep


def _is_protected_root(path: Path) -> bool:
    if path == Path(path.anchor):
        return True
    return path == Path.home().resolve()


def _load_gitignore(root: Path) -> pathspec.PathSpec:
    """Load .gitignore patterns using pathspec."""
    gitignore = root / ".gitignore"
    if not gitignore.exists():
        return pathspec.PathSpec.from_lines("gitignore", [])
    try:
        with open(gitignore, encoding="utf-8") as f:
            return pathspec.PathSpec.from_lines("gitignore", f)
    except OSError:
        return pathspec.PathSpec.from_lines("gitignore", [])
