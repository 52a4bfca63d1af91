"""Data models for the ingestion data flow."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class CollectedFiles:
    """Output of the collector: listing entries plus per-file descriptions.

    ``entries`` is the raw listing (directories end with a path
    separator). ``analysis`` maps each described file path, exactly as
    listed, to its one-line description and is read-only.
    """

    entries: tuple[str, ...]
    files: tuple[str, ...]
    directories: tuple[str, ...]
    analysis: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    limit_reached: bool = False
