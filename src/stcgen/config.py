"""Environment-based configuration and static lookup tables."""

from __future__ import annotations

import logging
from pathlib import PurePath

from pydantic import field_validator
from pydantic_settings import BaseSettings

from stcgen.constants import (
    LLM_MAX_OUTPUT_TOKENS,
    MANIFEST_FILENAME,
    MAX_DEFINITION_FILES,
    MAX_LISTED_FILES,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and environment variables."""

    # LLM Provider
    anthropic_api_key: str = ""
    openai_api_key: str = ""

    # Model (LiteLLM provider/model identifier)
    litellm_model: str = "anthropic/claude-3-5-sonnet-20241022"
    llm_timeout_seconds: int = 120
    llm_max_output_tokens: int = LLM_MAX_OUTPUT_TOKENS
    llm_temperature: float = 0.0

    # Manifest generation
    manifest_filename: str = MANIFEST_FILENAME
    max_listed_files: int = MAX_LISTED_FILES
    max_definition_files: int = MAX_DEFINITION_FILES

    # Logging
    log_level: str = "INFO"

    @field_validator("litellm_model")
    @classmethod
    def _validate_model(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("litellm_model must not be empty")
        return v

    @field_validator("manifest_filename")
    @classmethod
    def _validate_manifest_filename(cls, v: str) -> str:
        if not v or PurePath(v).name != v or v in (".", ".."):
            raise ValueError(
                "manifest_filename must be a bare file name, "
                f"got {v!r}"
            )
        if not v.endswith((".yaml", ".yml")):
            logger.warning(
                "manifest_filename %s does not have a YAML extension", v
            )
        return v

    @field_validator("max_listed_files", "max_definition_files")
    @classmethod
    def _validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("file limits must be at least 1")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "",
        "extra": "ignore",
    }


# Directories never descended into by the file lister (dependency
# caches and build output). Hidden directories are skipped separately.
SKIP_DIRECTORIES: frozenset[str] = frozenset({
    "node_modules",
    "__pycache__",
    "env",
    "venv",
    "target",
    "build",
    "dist",
    "out",
    "bundle",
    "vendor",
    "tmp",
    "temp",
    "deps",
    "pkg",
    "Pods",
})

# File extension → language name mapping
EXTENSION_MAP: dict[str, str] = {
    # Python
    ".py": "python",
    ".pyi": "python",
    # JavaScript
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    # TypeScript
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    # Java
    ".java": "java",
    # Go
    ".go": "go",
    # Rust
    ".rs": "rust",
    # C
    ".c": "c",
    ".h": "c",
    # C++
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".hxx": "cpp",
    ".hh": "cpp",
}

# Language → (import path, language factory) for tree-sitter grammars.
# tree_sitter_typescript ships two grammars in one package.
GRAMMAR_MODULES: dict[str, tuple[str, str]] = {
    "python": ("tree_sitter_python", "language"),
    "javascript": ("tree_sitter_javascript", "language"),
    "typescript": ("tree_sitter_typescript", "language_typescript"),
    "tsx": ("tree_sitter_typescript", "language_tsx"),
    "java": ("tree_sitter_java", "language"),
    "go": ("tree_sitter_go", "language"),
    "rust": ("tree_sitter_rust", "language"),
    "c": ("tree_sitter_c", "language"),
    "cpp": ("tree_sitter_cpp", "language"),
}
