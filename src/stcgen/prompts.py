"""Consolidated LLM prompts for stcgen.

All prompt text lives here; :mod:`stcgen.generation.prompt_builder`
only fills in the placeholders.
"""

from stcgen.constants import ManifestStatus

STATUS_VALUES = ", ".join(s.value for s in ManifestStatus)

# ── System prompt (identical for every request in a run) ──────────

MANIFEST_SYSTEM_PROMPT = """\
You are an expert at describing the structure of software projects as YAML \
manifests. You write {manifest_filename} files that document one directory of \
a source tree: its files, subdirectories, definitions and dependencies.

## Hard Constraints

1. Output YAML only. No prose before or after it, no markdown code fences.
2. Represent directory nesting hierarchically: subdirectories are nested \
under their parent's `directories` key, never flattened into paths.
3. Exclude system and housekeeping files (for example .DS_Store, Thumbs.db, \
desktop.ini, editor swap files).
4. Include the directory's own {manifest_filename} as an entry under `files`.
5. Every file entry has a `description` and a `status` field. `status` is \
exactly one of: {status_values}.
"""

# ── User message ──────────────────────────────────────────────────

ROOT_REQUEST_INTRO = """\
Generate the {manifest_filename} for the project root from the information \
below. Follow the template and fill in what the information supports."""

DIRECTORY_REQUEST_INTRO = """\
Generate the {manifest_filename} for the directory "{directory}" of the \
project from the information below. Follow the template and fill in what \
the information supports."""

USER_MESSAGE = """\
{intro}

Code definitions:
{definitions}

File analysis (paths relative to {scope}):
{file_analysis}

Template:
{template}

Generation rules:
{rules}
"""

GENERATION_RULES: tuple[str, ...] = (
    "Reflect the actual structure of the directory accurately.",
    "Describe functions and types concretely, based on the code definitions.",
    "Set each status according to how complete the implementation is "
    f"({STATUS_VALUES}).",
    "Take dependencies from package manifests (package.json, pyproject.toml "
    "and similar) when they are present.",
    "Include an optional template section only when there is relevant "
    "information for it; otherwise omit the section entirely. Never emit "
    "empty placeholders or {{...}} markers.",
    "Output YAML only, without markdown code fences.",
)

DIRECTORY_RULES: tuple[str, ...] = (
    "Describe how this directory relates to its parent directory "
    "(\"{parent}\"): its role in the parent project and any "
    "internal dependencies on sibling directories.",
)
