"""File scanning utilities for architect-linter."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Collection

SOURCE_EXTENSIONS = frozenset({".ts", ".tsx", ".js", ".jsx"})

EXCLUDED_DIRS = frozenset({"node_modules", "dist", "build", ".git", "target"})


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def _build_gitignore_matcher(root: Path) -> Callable[[str], bool] | None:
    gitignore_path = root / ".gitignore"
    if gitignore_path.is_file() and not gitignore_path.is_symlink():
        return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
    return None


def _should_include_file(
    path: Path,
    root: Path,
    extensions: Collection[str],
    gitignore_matches: Callable[[str], bool] | None,
) -> bool:
    """Check if a file should be included based on all filtering rules."""
    if path.suffix.lower() not in extensions:
        return False

    if not path.is_file() or path.is_symlink():
        return False

    if not _is_within_root(path, root):
        return False

    return gitignore_matches is None or not gitignore_matches(str(path))


def find_source_files(
    directory: Path,
    *,
    extensions: Collection[str] = SOURCE_EXTENSIONS,
    excluded_dirs: Collection[str] = EXCLUDED_DIRS,
) -> list[Path]:
    """Find all source files in a project, respecting the root .gitignore.

    Args:
        directory: Project root to search
        extensions: File suffixes (with dot) to include
        excluded_dirs: Directory names never descended into

    Returns:
        Absolute paths sorted lexicographically by relative path for
        deterministic ordering.
    """
    root = directory.resolve()
    gitignore_matches = _build_gitignore_matcher(root)

    matched: list[Path] = []
    for current, dirnames, filenames in os.walk(root):
        dirnames[:] = [
            name
            for name in dirnames
            if name not in excluded_dirs and not (Path(current) / name).is_symlink()
        ]
        for filename in filenames:
            path = Path(current) / filename
            if _should_include_file(path, root, extensions, gitignore_matches):
                matched.append(path)

    matched.sort(key=lambda p: p.relative_to(root).as_posix())
    return matched


__all__ = ["EXCLUDED_DIRS", "SOURCE_EXTENSIONS", "find_source_files"]
