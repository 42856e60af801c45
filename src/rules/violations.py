"""Violation records produced by the per-file rule checker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from parse.items import ParseError, SourceSpan
    from rules.config import ForbiddenRule


def _location(path: Path, span: SourceSpan | None) -> str:
    if span is None:
        return str(path)
    return f"{path}:{span.line}:{span.column}"


@dataclass(frozen=True)
class ForbiddenImport:
    path: Path
    rule: ForbiddenRule
    source: str
    span: SourceSpan
    builtin: bool = False

    code = "arch::forbidden-import"

    @property
    def message(self) -> str:
        if self.builtin:
            return "MVC: repositories must not be imported from controllers."
        return (
            f"Files in '{self.rule.from_pattern}' must not import "
            f"from '{self.rule.to}'."
        )

    def location(self) -> str:
        return _location(self.path, self.span)


@dataclass(frozen=True)
class MethodTooLong:
    path: Path
    class_name: str
    method_name: str
    line_count: int
    max_lines: int
    span: SourceSpan

    code = "arch::method-too-long"

    @property
    def message(self) -> str:
        return (
            f"Method '{self.class_name}.{self.method_name}' is too long "
            f"({self.line_count} lines). Maximum: {self.max_lines}."
        )

    def location(self) -> str:
        return _location(self.path, self.span)


@dataclass(frozen=True)
class ParseFailure:
    """A file that could not be parsed; counted like a rule violation."""

    path: Path
    reason: str
    span: SourceSpan | None = None

    code = "arch::parse-failure"

    @classmethod
    def from_error(cls, error: ParseError) -> ParseFailure:
        return cls(path=error.path, reason=error.message, span=error.span)

    @property
    def message(self) -> str:
        return self.reason

    def location(self) -> str:
        return _location(self.path, self.span)


Violation = ForbiddenImport | MethodTooLong | ParseFailure

__all__ = ["ForbiddenImport", "MethodTooLong", "ParseFailure", "Violation"]
