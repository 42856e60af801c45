"""Tree-sitter based extraction of imports and class methods for TS/JS files."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from parse.items import (
    ClassDeclaration,
    ImportDeclaration,
    MethodSpan,
    ParseError,
    SourceSpan,
    SyntaxItem,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

_GRAMMARS: dict[str, Callable[[], object]] = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
    "javascript": tree_sitter_javascript.language,
}

_GRAMMAR_BY_SUFFIX = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}

# Constructors are not methods for the length limit.
CONSTRUCTOR_NAME = "constructor"

_CLASS_NODE_TYPES = frozenset(
    {"class_declaration", "abstract_class_declaration", "class"}
)

# Parser instances are not safe to share between threads.
_LOCAL = threading.local()


def _get_parser(grammar: str) -> Parser:
    parsers: dict[str, Parser] | None = getattr(_LOCAL, "parsers", None)
    if parsers is None:
        parsers = {}
        _LOCAL.parsers = parsers

    parser = parsers.get(grammar)
    if parser is None:
        parser = Parser(Language(_GRAMMARS[grammar]()))
        parsers[grammar] = parser
    return parser


def grammar_for(file_path: Path) -> str:
    """Return the grammar name used for a file, TypeScript by default."""
    return _GRAMMAR_BY_SUFFIX.get(file_path.suffix.lower(), "typescript")


def _make_span(node: Node, source: bytes) -> SourceSpan:
    start = node.start_byte
    line_start = source.rfind(b"\n", 0, start) + 1
    line_end = source.find(b"\n", start)
    if line_end == -1:
        line_end = len(source)
    prefix = source[line_start:start].decode("utf-8", errors="replace")
    line_text = source[line_start:line_end].decode("utf-8", errors="replace")
    return SourceSpan(
        start=start,
        end=node.end_byte,
        line=node.start_point[0] + 1,
        column=len(prefix) + 1,
        line_text=line_text.rstrip("\r"),
    )


def _node_text(node: Node | None) -> str | None:
    if node is None or node.text is None:
        return None
    return node.text.decode("utf-8", errors="replace")


def _import_source(node: Node) -> str | None:
    """Return the module specifier of an import statement without quotes."""
    text = _node_text(node.child_by_field_name("source"))
    if text is None or len(text) < 2:
        return None
    return text[1:-1]


def _first_error_node(node: Node) -> Node | None:
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error_node(child)
            if found is not None:
                return found
    return None


def _class_methods(
    node: Node, class_name: str, source: bytes
) -> tuple[MethodSpan, ...]:
    body = node.child_by_field_name("body")
    if body is None:
        return ()

    methods: list[MethodSpan] = []
    for member in body.named_children:
        if member.type != "method_definition":
            continue
        name = _node_text(member.child_by_field_name("name")) or "<computed>"
        if name == CONSTRUCTOR_NAME:
            continue
        methods.append(
            MethodSpan(
                class_name=class_name,
                name=name,
                start_line=member.start_point[0] + 1,
                end_line=member.end_point[0] + 1,
                span=_make_span(member, source),
            )
        )
    return tuple(methods)


def _handle_class(node: Node, source: bytes) -> ClassDeclaration:
    class_name = _node_text(node.child_by_field_name("name")) or "<anonymous>"
    return ClassDeclaration(
        name=class_name,
        span=_make_span(node, source),
        methods=_class_methods(node, class_name, source),
    )


def _exported_class(node: Node) -> Node | None:
    """Return the class wrapped by an ``export`` statement, if any."""
    declaration = node.child_by_field_name("declaration")
    if declaration is not None and declaration.type in _CLASS_NODE_TYPES:
        return declaration
    for child in node.named_children:
        if child.type in _CLASS_NODE_TYPES:
            return child
    return None


def _parse(file_path: Path) -> tuple[Node, bytes]:
    try:
        source = file_path.read_bytes()
    except OSError as exc:
        raise ParseError(file_path, f"cannot read file: {exc.strerror or exc}") from exc

    tree = _get_parser(grammar_for(file_path)).parse(source)
    root = tree.root_node
    if root.has_error:
        error_node = _first_error_node(root)
        span = _make_span(error_node, source) if error_node is not None else None
        raise ParseError(file_path, "Syntax Error", span=span)
    return root, source


def extract_items(file_path: Path) -> list[SyntaxItem]:
    """Extract top-level imports and classes from a TS/JS file.

    Args:
        file_path: Path of the file to parse

    Returns:
        Import and class declarations in source order.

    Raises:
        ParseError: If the file cannot be read or contains syntax errors.
    """
    root, source = _parse(file_path)

    items: list[SyntaxItem] = []
    for node in root.named_children:
        if node.type == "import_statement":
            import_source = _import_source(node)
            if import_source is not None:
                items.append(ImportDeclaration(import_source, _make_span(node, source)))
        elif node.type in _CLASS_NODE_TYPES:
            items.append(_handle_class(node, source))
        elif node.type == "export_statement":
            class_node = _exported_class(node)
            if class_node is not None:
                items.append(_handle_class(class_node, source))

    return items


def extract_import_sources(file_path: Path) -> list[str]:
    """Return the raw module specifiers of every top-level import."""
    return [
        item.source
        for item in extract_items(file_path)
        if isinstance(item, ImportDeclaration)
    ]


__all__ = ["extract_import_sources", "extract_items", "grammar_for"]
