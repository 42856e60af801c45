"""Parsing utilities for TypeScript and JavaScript sources."""

from parse.items import (
    ClassDeclaration,
    ImportDeclaration,
    MethodSpan,
    ParseError,
    SourceSpan,
    SyntaxItem,
)
from parse.typescript import extract_import_sources, extract_items, grammar_for

__all__ = [
    "ClassDeclaration",
    "ImportDeclaration",
    "MethodSpan",
    "ParseError",
    "SourceSpan",
    "SyntaxItem",
    "extract_import_sources",
    "extract_items",
    "grammar_for",
]
