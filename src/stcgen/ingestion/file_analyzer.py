"""Describe a single file in one line without calling the model.

A best-effort heuristic keyed on the file extension: headings of
markdown files, the identity block of ``package.json``, leading doc
comments of scripts. Anything unreadable or malformed falls back to
:data:`FALLBACK_DESCRIPTION`.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from pathlib import Path

from stcgen.constants import (
    DOCUMENTATION_DESCRIPTION,
    FALLBACK_DESCRIPTION,
    JSON_DESCRIPTION,
    PACKAGE_MANIFEST_KEYS,
    PACKAGE_MANIFEST_NAME,
    SOURCE_DESCRIPTION,
    YAML_DESCRIPTION,
)
from stcgen.ingestion import is_binary

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^# (.+)$", re.MULTILINE)
_BLOCK_COMMENT_RE = re.compile(r"/\*\*(.*?)\*/", re.DOTALL)
_COMMENT_DECORATION_RE = re.compile(r"^\s*\*+\s?")

_SCRIPT_EXTENSIONS = frozenset({".ts", ".js", ".tsx", ".jsx"})
_YAML_EXTENSIONS = frozenset({".yaml", ".yml"})


def analyze_file(path: str | Path) -> str:
    """Return a short description of *path*. Never raises."""
    file_path = Path(path)
    try:
        describe = _describer_for(file_path)
        if describe is None:
            return FALLBACK_DESCRIPTION
        return describe(file_path)
    except Exception as exc:  # noqa: BLE001
        logger.warning(
            "event=file_analysis_failed path=%s error=%s", file_path, exc
        )
        return FALLBACK_DESCRIPTION


def _describer_for(path: Path) -> Callable[[Path], str] | None:
    """Pick the description strategy for a file; None means fallback."""
    ext = path.suffix.lower()
    if ext == ".md":
        return _describe_markdown
    if path.name == PACKAGE_MANIFEST_NAME:
        return _describe_package_manifest
    if ext == ".json":
        return lambda _: JSON_DESCRIPTION
    if ext in _YAML_EXTENSIONS:
        return lambda _: YAML_DESCRIPTION
    if ext in _SCRIPT_EXTENSIONS:
        return _describe_script
    return None


def _read_text(path: Path) -> str:
    if is_binary(path):
        msg = f"binary or unreadable file: {path}"
        raise ValueError(msg)
    return path.read_text(encoding="utf-8", errors="replace")


def _describe_markdown(path: Path) -> str:
    match = _HEADING_RE.search(_read_text(path))
    if match is None:
        return DOCUMENTATION_DESCRIPTION
    return match.group(1).strip() or DOCUMENTATION_DESCRIPTION


def _describe_package_manifest(path: Path) -> str:
    data = json.loads(_read_text(path))
    if not isinstance(data, dict):
        msg = f"{PACKAGE_MANIFEST_NAME} is not a JSON object"
        raise ValueError(msg)
    summary = {key: data[key] for key in PACKAGE_MANIFEST_KEYS if key in data}
    return json.dumps(summary, separators=(",", ":"), ensure_ascii=False)


def _describe_script(path: Path) -> str:
    match = _BLOCK_COMMENT_RE.search(_read_text(path))
    if match is None:
        return SOURCE_DESCRIPTION
    lines = (
        _COMMENT_DECORATION_RE.sub("", line).strip()
        for line in match.group(1).splitlines()
    )
    text = " ".join(line for line in lines if line)
    return text or SOURCE_DESCRIPTION
