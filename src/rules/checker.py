"""Per-file architecture rule checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from parse.items import ClassDeclaration, ImportDeclaration
from rules.config import ForbiddenRule, ViolationPolicy
from rules.violations import ForbiddenImport, MethodTooLong

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

    from parse.items import SyntaxItem
    from rules.config import RuleContext
    from rules.violations import Violation

# Applied to every project, after the configured rules.
CONTROLLER_REPOSITORY_RULE = ForbiddenRule(from_pattern="controller", to=".repository")


def _check_import(
    file_path: Path,
    declaration: ImportDeclaration,
    context: RuleContext,
) -> ForbiddenImport | None:
    path_text = str(file_path)
    for rule in context.forbidden_rules:
        if rule.matches(path_text, declaration.source):
            return ForbiddenImport(
                path=file_path,
                rule=rule,
                source=declaration.source,
                span=declaration.span,
            )

    if CONTROLLER_REPOSITORY_RULE.matches(path_text, declaration.source):
        return ForbiddenImport(
            path=file_path,
            rule=CONTROLLER_REPOSITORY_RULE,
            source=declaration.source,
            span=declaration.span,
            builtin=True,
        )
    return None


def _check_class(
    file_path: Path,
    declaration: ClassDeclaration,
    context: RuleContext,
) -> Iterator[MethodTooLong]:
    for method in declaration.methods:
        if method.line_count > context.max_lines:
            yield MethodTooLong(
                path=file_path,
                class_name=method.class_name,
                method_name=method.name,
                line_count=method.line_count,
                max_lines=context.max_lines,
                span=method.span,
            )


def _iter_violations(
    file_path: Path,
    items: Iterable[SyntaxItem],
    context: RuleContext,
) -> Iterator[Violation]:
    for item in items:
        if isinstance(item, ImportDeclaration):
            found = _check_import(file_path, item, context)
            if found is not None:
                yield found
        elif isinstance(item, ClassDeclaration):
            yield from _check_class(file_path, item, context)


def check_file(
    file_path: Path,
    items: Iterable[SyntaxItem],
    context: RuleContext,
) -> list[Violation]:
    """Apply forbidden-import and method-length rules to one file.

    Items are visited in declaration order. Under ``FIRST_ONLY`` the check
    stops at the first violation, so at most one is returned; under
    ``EXHAUSTIVE`` every violation is collected (one per offending import
    and one per offending method).

    Args:
        file_path: Path of the file the items were extracted from
        items: Extracted imports and classes, in source order
        context: Run-wide rule settings

    Returns:
        Violations found, empty when the file passes.
    """
    violations = _iter_violations(file_path, items, context)
    if context.policy is ViolationPolicy.FIRST_ONLY:
        first = next(violations, None)
        return [] if first is None else [first]
    return list(violations)


__all__ = ["CONTROLLER_REPOSITORY_RULE", "check_file"]
