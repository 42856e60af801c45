"""Plain-text rendering of violations and cycle reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graph.algos import Cycle
    from parse.items import SourceSpan
    from rules.violations import Violation

RULE = "━" * 40

CYCLE_FIXES = (
    "Apply dependency injection to break the cycle",
    "Extract the shared logic into a third module",
    "Use events/observers instead of direct calls",
    "Apply the dependency inversion principle (DIP)",
)


def _snippet(span: SourceSpan) -> list[str]:
    if not span.line_text:
        return []
    gutter = f"{span.line} | "
    # Spans covering several lines are underlined up to the end of the first.
    remaining = len(span.line_text) - (span.column - 1)
    width = max(1, min(span.length, remaining))
    marker = " " * (len(gutter) + span.column - 1) + "^" * width
    return [gutter + span.line_text, marker]


def render_violation(violation: Violation) -> str:
    """Render one located violation block."""
    lines = [
        f"Violation in: {violation.path}",
        f"{violation.location()}: {violation.code}: {violation.message}",
    ]
    if violation.span is not None:
        lines.extend(_snippet(violation.span))
    return "\n".join(lines) + "\n"


def render_cycle_report(cycles: Sequence[Cycle]) -> str:
    if not cycles:
        return "No circular dependencies detected.\n"

    lines = [
        "CIRCULAR DEPENDENCIES DETECTED",
        "",
        f"Found {len(cycles)} dependency cycle(s):",
        "",
    ]
    for number, cycle in enumerate(cycles, start=1):
        lines.extend([RULE, f"Cycle #{number}", RULE])
        for node in cycle.nodes[:-1]:
            lines.append(f"  {node} ->")
        lines.append(f"  {cycle.nodes[-1]} (closes the cycle)")
        lines.append("")
        lines.append(cycle.description)
        lines.append("")

    lines.append("Suggested fixes:")
    lines.extend(f"  {i}. {fix}" for i, fix in enumerate(CYCLE_FIXES, start=1))
    return "\n".join(lines) + "\n"


def render_summary(violation_count: int, cycle_count: int) -> str:
    if violation_count == 0 and cycle_count == 0:
        return "Project is clean.\n"
    parts = []
    if violation_count:
        parts.append(f"Found {violation_count} violation(s).")
    if cycle_count:
        parts.append(f"Found {cycle_count} circular dependency(ies).")
    return " ".join(parts) + "\n"


__all__ = ["render_cycle_report", "render_summary", "render_violation"]
