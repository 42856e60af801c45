"""Run orchestration: parallel per-file checks, then graph and cycles."""

from __future__ import annotations

import logging
import os
import sys
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tqdm import tqdm

from graph.algos import detect_cycles
from graph.builder import build_dependency_graph
from parse.items import ParseError
from parse.typescript import extract_items
from report.render import render_violation
from rules.checker import check_file
from rules.violations import ParseFailure

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from graph.algos import Cycle
    from graph.builder import GraphBuildWarning
    from rules.config import RuleContext
    from rules.violations import Violation

logger = logging.getLogger(__name__)

ViolationReporter = Callable[["Violation"], None]


def print_violation(violation: Violation) -> None:
    tqdm.write(render_violation(violation), file=sys.stdout, end="")


@dataclass
class RunResult:
    violation_count: int = 0
    cycles: list[Cycle] = field(default_factory=list)
    warnings: list[GraphBuildWarning] = field(default_factory=list)
    graph_built: bool = True

    @property
    def ok(self) -> bool:
        return self.violation_count == 0 and not self.cycles

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


class _ViolationCounter:
    """Violation tally and progress bar shared by the worker threads."""

    def __init__(self, progress: tqdm) -> None:
        self._lock = threading.Lock()
        self._progress = progress
        self.value = 0

    def file_done(self, violations: int) -> None:
        with self._lock:
            self.value += violations
            self._progress.update(1)


def check_one(file_path: Path, context: RuleContext) -> list[Violation]:
    """Extract and check a single file; parse failures become violations."""
    try:
        items = extract_items(file_path)
    except ParseError as exc:
        return [ParseFailure.from_error(exc)]
    return check_file(file_path, items, context)


def run(
    files: Sequence[Path],
    context: RuleContext,
    project_root: Path,
    *,
    jobs: int | None = None,
    report: ViolationReporter = print_violation,
    show_progress: bool = False,
) -> RunResult:
    """Check every file in parallel, then detect circular imports.

    Violations are passed to ``report`` from the worker threads as soon as
    they are found. The dependency graph is built only once all per-file
    checks have finished.

    Args:
        files: Source files to analyze
        context: Rule settings shared read-only by all workers
        project_root: Root used for dependency graph keys
        jobs: Worker thread count (default: CPU count)
        report: Callback invoked for each violation
        show_progress: Display a progress bar on stderr

    Returns:
        RunResult with the violation count, cycles and graph warnings.
    """
    workers = jobs or os.cpu_count() or 1
    result = RunResult()

    with tqdm(
        total=len(files),
        unit="file",
        file=sys.stderr,
        disable=not show_progress,
        leave=False,
    ) as progress:
        counter = _ViolationCounter(progress)

        def task(file_path: Path) -> None:
            violations = check_one(file_path, context)
            for violation in violations:
                report(violation)
            counter.file_done(len(violations))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            # Consume the iterator so worker exceptions propagate here.
            for _ in executor.map(task, files):
                pass

    result.violation_count = counter.value

    try:
        build = build_dependency_graph(files, project_root)
    except OSError as exc:
        logger.warning(
            "Dependency graph could not be built, skipping cycle detection: %s", exc
        )
        result.graph_built = False
        return result

    result.warnings = build.warnings
    result.cycles = detect_cycles(build.graph)
    logger.debug(
        "Dependency graph: %d nodes, %d cycles",
        len(build.graph),
        len(result.cycles),
    )
    return result


__all__ = ["RunResult", "check_one", "print_violation", "run"]
