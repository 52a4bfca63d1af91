"""Extract top-level code definitions of a directory with tree-sitter."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path

import tree_sitter

from stcgen.analysis.schemas import Definition, DefinitionSet, FileDefinitions
from stcgen.config import EXTENSION_MAP, GRAMMAR_MODULES
from stcgen.constants import MAX_DEFINITION_FILES
from stcgen.ingestion import is_binary

logger = logging.getLogger(__name__)

_JS_NODE_TYPES: dict[str, str] = {
    "function_declaration": "function",
    "generator_function_declaration": "function",
    "class_declaration": "class",
    "export_statement": "export",
    "lexical_declaration": "variable",
}

_TS_NODE_TYPES: dict[str, str] = {
    **_JS_NODE_TYPES,
    "abstract_class_declaration": "class",
    "interface_declaration": "interface",
    "type_alias_declaration": "type",
    "enum_declaration": "type",
}

# Node types that represent named declarations, per language.
_ENTITY_NODE_TYPES: dict[str, dict[str, str]] = {
    "python": {
        "function_definition": "function",
        "class_definition": "class",
        "decorated_definition": "decorated",
    },
    "javascript": _JS_NODE_TYPES,
    "typescript": _TS_NODE_TYPES,
    "tsx": _TS_NODE_TYPES,
    "java": {
        "class_declaration": "class",
        "interface_declaration": "interface",
        "enum_declaration": "class",
        "record_declaration": "class",
    },
    "go": {
        "function_declaration": "function",
        "method_declaration": "function",
        "type_declaration": "type",
    },
    "rust": {
        "function_item": "function",
        "impl_item": "class",
        "struct_item": "class",
        "enum_item": "type",
        "trait_item": "interface",
    },
    "c": {
        "function_definition": "function",
        "struct_specifier": "class",
        "enum_specifier": "type",
    },
    "cpp": {
        "function_definition": "function",
        "class_specifier": "class",
        "struct_specifier": "class",
        "namespace_definition": "class",
    },
}

_NAME_NODE_TYPES = ("identifier", "name", "type_identifier", "property_identifier")
# Wrappers whose name sits one level down (const x = ..., type X struct, int f()).
_DECLARATOR_NODE_TYPES = (
    "variable_declarator",
    "type_spec",
    "function_declarator",
)
_PARAMS_NODE_TYPES = ("parameters", "formal_parameters", "parameter_list")
_BODY_NODE_TYPES = ("block", "class_body", "declaration_list", "field_declaration_list")
_COMMENT_NODE_TYPES = ("comment", "block_comment")


def extract_definitions(
    directory: str | Path,
    max_files: int = MAX_DEFINITION_FILES,
) -> DefinitionSet:
    """Collect the top-level definitions of source files directly in *directory*.

    Only the directory's own files are parsed (no recursion), sorted by
    name, at most *max_files* of them; the rest are reported in
    ``skipped_files``. Files without an importable grammar contribute
    nothing. A file that fails to parse is logged and skipped.

    Raises :class:`FileNotFoundError` if *directory* does not exist.
    """
    base = Path(directory).resolve()
    if not base.is_dir():
        msg = f"Directory does not exist: {base}"
        raise FileNotFoundError(msg)

    sources = [
        p
        for p in sorted(base.iterdir(), key=lambda p: p.name)
        if p.is_file()
        and not p.name.startswith(".")
        and EXTENSION_MAP.get(p.suffix.lower()) in GRAMMAR_MODULES
    ]
    result = DefinitionSet(
        directory=str(base),
        skipped_files=[p.name for p in sources[max_files:]],
    )

    for path in sources[:max_files]:
        language = EXTENSION_MAP[path.suffix.lower()]
        try:
            definitions = _extract_file(path, language)
        except Exception:  # noqa: BLE001
            # Malformed code or parser crash → skip file
            logger.warning(
                "event=definition_extraction_failed path=%s",
                path,
                exc_info=True,
            )
            continue
        if definitions is None:
            continue
        result.files.append(
            FileDefinitions(
                file=path.name, language=language, definitions=definitions
            )
        )

    return result


def _extract_file(path: Path, language: str) -> list[Definition] | None:
    """Parse one file; None when no grammar is available or it is binary."""
    parser = _get_parser(language)
    if parser is None or is_binary(path):
        return None

    tree = parser.parse(path.read_bytes())
    node_types = _ENTITY_NODE_TYPES.get(language, {})
    definitions: list[Definition] = []
    for child in tree.root_node.children:
        definitions.extend(
            _extract_definition(child, language, node_types, doc_node=child)
        )
    return definitions


def _extract_definition(
    node: tree_sitter.Node,
    language: str,
    node_types: dict[str, str],
    doc_node: tree_sitter.Node,
) -> list[Definition]:
    kind = node_types.get(node.type)
    if kind is None:
        return []

    # decorated_definition / export_statement wrap the real declaration;
    # the doc comment precedes the wrapper.
    if kind in ("decorated", "export"):
        results: list[Definition] = []
        for child in node.children:
            child_kind = node_types.get(child.type)
            if child_kind and child_kind not in ("decorated", "export"):
                results.extend(
                    _extract_definition(child, language, node_types, doc_node)
                )
        return results

    name = _get_name(node)
    if name is None:
        return []

    members: list[str] = []
    if kind in ("class", "interface"):
        members = _get_member_names(node)

    return [
        Definition(
            name=name,
            kind=kind,
            line=node.start_point[0] + 1,
            signature=_get_signature(node, language),
            docstring=_get_docstring(node, doc_node, language),
            members=members,
        )
    ]


def _text(node: tree_sitter.Node) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def _get_name(node: tree_sitter.Node) -> str | None:
    """Extract the identifier name from a declaration node."""
    for child in node.children:
        if child.type in _NAME_NODE_TYPES:
            return _text(child) or None
    for child in node.children:
        if child.type in _DECLARATOR_NODE_TYPES:
            return _get_name(child)
    return None


def _get_signature(node: tree_sitter.Node, language: str) -> str | None:
    """Extract the function/method signature (parameters)."""
    params_node = _find_params(node)
    if params_node is None:
        return None

    sig_text = _text(params_node)
    name = _get_name(node)
    if name and language == "python":
        ret = _get_return_type(node)
        ret_str = f" -> {ret}" if ret else ""
        return f"{name}{sig_text}{ret_str}"

    return f"{name or ''}{sig_text}" if name else sig_text


def _find_params(node: tree_sitter.Node) -> tree_sitter.Node | None:
    for child in node.children:
        if child.type in _PARAMS_NODE_TYPES:
            return child
    for child in node.children:
        if child.type == "function_declarator":
            return _find_params(child)
    return None


def _get_return_type(node: tree_sitter.Node) -> str | None:
    """Extract return type annotation (Python)."""
    for child in node.children:
        if child.type == "type":
            return _text(child) or None
    return None


def _get_docstring(
    node: tree_sitter.Node,
    doc_node: tree_sitter.Node,
    language: str,
) -> str | None:
    """Extract the docstring or leading doc comment."""
    if language == "python":
        for child in node.children:
            if child.type != "block":
                continue
            for stmt in child.children:
                if stmt.type == "expression_statement":
                    for expr in stmt.children:
                        if expr.type == "string":
                            return _text(expr).strip("\"'").strip() or None
                break  # Only check first statement
        return None

    prev = doc_node.prev_sibling
    if prev is not None and prev.type in _COMMENT_NODE_TYPES:
        lines = (
            line.strip().lstrip("/*").rstrip("*/").strip()
            for line in _text(prev).splitlines()
        )
        return " ".join(line for line in lines if line) or None
    return None


def _get_member_names(node: tree_sitter.Node) -> list[str]:
    """Extract names of methods/fields inside a class-like node."""
    body = next(
        (c for c in node.children if c.type in _BODY_NODE_TYPES), None
    )
    if body is None:
        return []
    names: list[str] = []
    for child in body.children:
        if child.type in _COMMENT_NODE_TYPES or not child.is_named:
            continue
        target = child
        if child.type == "decorated_definition":
            target = next(
                (c for c in child.children if c.type.endswith("definition")),
                child,
            )
        name = _get_name(target)
        if name and child.type != "expression_statement":
            names.append(name)
    return names


# ---------------------------------------------------------------------------
# Parser cache
# ---------------------------------------------------------------------------

_parser_cache: dict[str, tree_sitter.Parser] = {}


def _get_parser(language: str) -> tree_sitter.Parser | None:
    """Get or create a cached tree-sitter parser."""
    if language in _parser_cache:
        return _parser_cache[language]

    grammar = GRAMMAR_MODULES.get(language)
    if grammar is None:
        return None
    module_name, factory = grammar

    try:
        mod = importlib.import_module(module_name)
        capsule: object = getattr(mod, factory)()
        lang = tree_sitter.Language(capsule)
        parser = tree_sitter.Parser(lang)
    except (ImportError, AttributeError):
        logger.debug("event=grammar_unavailable language=%s", language)
        return None
    _parser_cache[language] = parser
    return parser
