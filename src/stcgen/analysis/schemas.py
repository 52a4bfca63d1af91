"""Pydantic models for definition extraction output."""

from pydantic import BaseModel, Field


class Definition(BaseModel):
    """A named top-level declaration."""

    name: str
    kind: str  # function, class, interface, type
    line: int
    signature: str | None = None
    docstring: str | None = None
    members: list[str] = Field(default_factory=lambda: list[str]())


class FileDefinitions(BaseModel):
    """All top-level declarations of one source file."""

    file: str
    language: str
    definitions: list[Definition] = Field(
        default_factory=lambda: list[Definition]()
    )


class DefinitionSet(BaseModel):
    """Top-level definitions of the source files directly in a directory."""

    directory: str
    files: list[FileDefinitions] = Field(
        default_factory=lambda: list[FileDefinitions]()
    )
    skipped_files: list[str] = Field(default_factory=lambda: list[str]())

    def is_empty(self) -> bool:
        return not any(f.definitions for f in self.files)
