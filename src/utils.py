"""Shared utilities for architect-linter."""

from __future__ import annotations

import os
from pathlib import Path


def normalize_path(file_path: str | Path, root: str | Path) -> str:
    """Convert a file path to its dependency-graph key.

    Args:
        file_path: Absolute or root-relative file path
        root: Project root directory

    Returns:
        Path relative to ``root`` with forward slashes, lower-cased. Paths
        outside the root keep their full normalized form.

    Examples:
        >>> normalize_path("/repo/src/Foo/Bar.ts", "/repo")
        'src/foo/bar.ts'
        >>> normalize_path("/repo/src/a/../b/C.ts", "/repo")
        'src/b/c.ts'
    """
    # Lexical only: symlinks are not followed so keys stay stable.
    path = Path(os.path.normpath(file_path))
    try:
        relative = path.relative_to(os.path.normpath(root))
    except ValueError:
        relative = path

    return str(relative).replace("\\", "/").lower()
