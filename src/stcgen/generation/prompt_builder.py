"""Assemble the system prompt and user message for one manifest."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from stcgen.constants import MANIFEST_FILENAME, MessageRole
from stcgen.generation.schemas import GenerationRequest
from stcgen.llm.schemas import ChatMessage
from stcgen.prompts import (
    DIRECTORY_REQUEST_INTRO,
    DIRECTORY_RULES,
    GENERATION_RULES,
    MANIFEST_SYSTEM_PROMPT,
    ROOT_REQUEST_INTRO,
    STATUS_VALUES,
    USER_MESSAGE,
)


def build_system_prompt(manifest_filename: str = MANIFEST_FILENAME) -> str:
    """The rules every manifest must satisfy; identical for a whole run."""
    return MANIFEST_SYSTEM_PROMPT.format(
        manifest_filename=manifest_filename,
        status_values=STATUS_VALUES,
    )


def scope_analysis(
    analysis: Mapping[str, str],
    directory: str | Path,
) -> dict[str, str]:
    """Entries of *analysis* under *directory*, keyed relative to it.

    Keys use forward slashes regardless of platform so prompts are
    identical everywhere.
    """
    base = Path(directory)
    scoped: dict[str, str] = {}
    for path, description in analysis.items():
        try:
            rel = Path(path).relative_to(base)
        except ValueError:
            continue
        if rel.parts:
            scoped[rel.as_posix()] = description
    return scoped


def build_root_request(
    definitions: Any,
    analysis: Mapping[str, str],
    template: str,
    root: str | Path,
    *,
    manifest_filename: str = MANIFEST_FILENAME,
) -> GenerationRequest:
    """Request for the project root's manifest."""
    intro = ROOT_REQUEST_INTRO.format(manifest_filename=manifest_filename)
    content = _user_message(
        intro=intro,
        definitions=definitions,
        analysis=scope_analysis(analysis, root),
        scope="the project root",
        template=template,
        rules=GENERATION_RULES,
    )
    return _request(content, manifest_filename)


def build_directory_request(
    definitions: Any,
    analysis: Mapping[str, str],
    template: str,
    root: str | Path,
    directory: str | Path,
    *,
    manifest_filename: str = MANIFEST_FILENAME,
) -> GenerationRequest:
    """Request for a subdirectory's manifest, aware of its parent."""
    root_path = Path(root)
    dir_path = Path(directory)
    try:
        label = dir_path.relative_to(root_path).as_posix()
    except ValueError:
        label = dir_path.name
    parent = dir_path.parent
    parent_label = (
        root_path.name if parent == root_path else parent.as_posix()
    )

    intro = DIRECTORY_REQUEST_INTRO.format(
        manifest_filename=manifest_filename, directory=label
    )
    rules = GENERATION_RULES + tuple(
        rule.format(parent=parent_label) for rule in DIRECTORY_RULES
    )
    content = _user_message(
        intro=intro,
        definitions=definitions,
        analysis=scope_analysis(analysis, dir_path),
        scope=f'"{label}"',
        template=template,
        rules=rules,
    )
    return _request(content, manifest_filename)


def _user_message(
    *,
    intro: str,
    definitions: Any,
    analysis: dict[str, str],
    scope: str,
    template: str,
    rules: tuple[str, ...],
) -> str:
    return USER_MESSAGE.format(
        intro=intro,
        definitions=_to_json(definitions),
        file_analysis=_to_json(analysis),
        scope=scope,
        template=template,
        rules="\n".join(f"{i}. {rule}" for i, rule in enumerate(rules, 1)),
    )


def _request(content: str, manifest_filename: str) -> GenerationRequest:
    return GenerationRequest(
        system_prompt=build_system_prompt(manifest_filename),
        messages=(ChatMessage(role=MessageRole.USER, content=content),),
    )


def _to_json(value: Any) -> str:
    """Serialize pydantic models or plain JSON-compatible values."""
    if hasattr(value, "model_dump"):
        value = value.model_dump(mode="json")
    return json.dumps(value, indent=2, ensure_ascii=False)
