"""Static analysis: top-level code definitions per directory."""

from stcgen.analysis.schemas import Definition, DefinitionSet, FileDefinitions

__all__ = ["Definition", "DefinitionSet", "FileDefinitions"]
