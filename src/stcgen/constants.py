"""Shared constants: single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so downstream code (JSON prompts,
log lines) works unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class ChunkType(StrEnum):
    """Tags carried by streamed model response chunks."""

    TEXT = "text"
    USAGE = "usage"
    REASONING = "reasoning"


class ManifestStatus(StrEnum):
    """Allowed values of the ``status`` field of manifest entries."""

    IMPLEMENTED = "implemented"
    IN_PROGRESS = "in_progress"
    PLANNED = "planned"


class MessageRole(StrEnum):
    """Roles of chat messages sent to the model."""

    USER = "user"
    ASSISTANT = "assistant"


# ── Manifest ─────────────────────────────────────────────

MANIFEST_FILENAME = "stc.yaml"

# ── Collection Limits ────────────────────────────────────

MAX_LISTED_FILES = 200
MAX_DEFINITION_FILES = 50

# ── File Analysis ────────────────────────────────────────

FALLBACK_DESCRIPTION = "Project file"
DOCUMENTATION_DESCRIPTION = "Documentation file"
JSON_DESCRIPTION = "Configuration file"
YAML_DESCRIPTION = "YAML configuration file"
SOURCE_DESCRIPTION = "Source code file"
PACKAGE_MANIFEST_NAME = "package.json"
PACKAGE_MANIFEST_KEYS = ("name", "version", "dependencies", "devDependencies")

# ── Retry Strategy ───────────────────────────────────────

RETRY_MAX_ATTEMPTS = 3
RETRY_INITIAL_WAIT = 2
RETRY_MAX_WAIT = 30

# ── LLM Output ───────────────────────────────────────────

LLM_MAX_OUTPUT_TOKENS = 8192

# ── Misc ─────────────────────────────────────────────────

BINARY_DETECTION_BUFFER = 8192
ERROR_TRUNCATION_CHARS = 200
