"""Command-line interface for architect-linter."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from engine.runner import run
from report.render import render_cycle_report, render_summary
from rules.config import (
    ConfigError,
    RuleContext,
    ViolationPolicy,
    config_path,
    load_config,
    write_default_config,
)
from rules.detect import detect_framework, suggested_max_lines
from scan.files import find_source_files

__version__ = "0.3.0"


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="architect-linter",
        description=(
            "Check forbidden imports, method length and circular "
            "dependencies in a TypeScript/JavaScript project."
        ),
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--init",
        action="store_true",
        help="Create architect.json with detected defaults when it is missing",
    )
    parser.add_argument(
        "--exhaustive",
        action="store_true",
        help="Report every violation per file instead of only the first",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=None,
        help="Number of worker threads (default: CPU count)",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not display the progress bar",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _init_config(root: Path) -> None:
    framework = detect_framework(root)
    max_lines = suggested_max_lines(framework)
    write_default_config(root, max_lines=max_lines)
    sys.stdout.write(
        f"Created {config_path(root)} "
        f"(framework: {framework.value}, max lines: {max_lines})\n"
    )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    root = Path(args.root).expanduser().resolve()
    if not root.is_dir():
        sys.stderr.write(f"error: project root is not a directory: {root}\n")
        return 1

    if args.jobs is not None and args.jobs < 1:
        sys.stderr.write("error: --jobs must be at least 1\n")
        return 1

    if args.init and not config_path(root).is_file():
        _init_config(root)

    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        if not config_path(root).is_file():
            sys.stderr.write("hint: run with --init to create a default config\n")
        return 1

    policy = (
        ViolationPolicy.EXHAUSTIVE if args.exhaustive else ViolationPolicy.FIRST_ONLY
    )
    context = RuleContext.from_config(config, policy)

    files = find_source_files(root)
    if not files:
        sys.stdout.write("No source files found.\n")
        return 0

    show_progress = not args.no_progress and sys.stderr.isatty()
    result = run(files, context, root, jobs=args.jobs, show_progress=show_progress)

    if result.graph_built:
        sys.stdout.write(render_cycle_report(result.cycles))
    sys.stdout.write(render_summary(result.violation_count, len(result.cycles)))
    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
