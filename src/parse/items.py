"""Syntax items extracted from a single source file.

Only the top-level items the architecture rules care about are modelled:
import declarations and class declarations with their method spans. Items
are kept in source declaration order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class SourceSpan:
    """Byte range into the owning file plus its 1-based start position."""

    start: int
    end: int
    line: int
    column: int
    line_text: str = ""

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class ImportDeclaration:
    source: str
    span: SourceSpan


@dataclass(frozen=True)
class MethodSpan:
    class_name: str
    name: str
    start_line: int
    end_line: int
    span: SourceSpan

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line


@dataclass(frozen=True)
class ClassDeclaration:
    name: str
    span: SourceSpan
    methods: tuple[MethodSpan, ...] = field(default_factory=tuple)


SyntaxItem = ImportDeclaration | ClassDeclaration


class ParseError(Exception):
    """Raised when a source file cannot be read or parsed cleanly."""

    def __init__(
        self,
        path: Path,
        message: str,
        *,
        span: SourceSpan | None = None,
    ) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
        self.span = span


__all__ = [
    "ClassDeclaration",
    "ImportDeclaration",
    "MethodSpan",
    "ParseError",
    "SourceSpan",
    "SyntaxItem",
]
