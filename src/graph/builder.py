"""Project-wide dependency graph construction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from parse.items import ParseError
from parse.typescript import extract_import_sources
from utils import normalize_path

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

DependencyGraph = dict[str, list[str]]

RESOLVE_EXTENSIONS = ("ts", "tsx", "js", "jsx")
INDEX_FILES = ("index.ts", "index.js")
EXTERNAL_DIR = "node_modules"


@dataclass(frozen=True)
class GraphBuildWarning:
    """A file whose imports could not be extracted during graph build."""

    path: Path
    message: str

    def location(self) -> str:
        return str(self.path)


@dataclass
class GraphBuild:
    graph: DependencyGraph = field(default_factory=dict)
    warnings: list[GraphBuildWarning] = field(default_factory=list)


def is_external_specifier(specifier: str) -> bool:
    """Return True for package imports that never map to project files."""
    return (
        specifier.startswith("@")
        or specifier.startswith(EXTERNAL_DIR)
        or not (specifier.startswith(".") or specifier.startswith("/"))
    )


def is_internal_dependency(key: str) -> bool:
    return EXTERNAL_DIR not in key


def resolve_import_path(current_file: Path, specifier: str) -> Path | None:
    """Resolve a relative or absolute import specifier to an existing file.

    Tries ``<specifier>.<ext>`` for each known extension, then
    ``<specifier>/index.ts`` and ``<specifier>/index.js``, then the
    specifier itself.

    Examples:
        ``./user.service`` next to ``user.service.ts`` resolves to that
        file; ``../shared`` resolves to ``../shared/index.ts`` when the
        directory has one.
    """
    if is_external_specifier(specifier):
        return None

    resolved = current_file.parent / specifier

    for ext in RESOLVE_EXTENSIONS:
        candidate = Path(f"{resolved}.{ext}")
        if candidate.is_file():
            return candidate

    for index_name in INDEX_FILES:
        candidate = resolved / index_name
        if candidate.is_file():
            return candidate

    if resolved.is_file():
        return resolved
    return None


def _resolve_targets(
    file_path: Path,
    project_root: Path,
    extract: Callable[[Path], list[str]],
) -> list[str]:
    """Return the internal node keys a file imports, in import order."""
    targets: list[str] = []
    for specifier in extract(file_path):
        resolved = resolve_import_path(file_path, specifier)
        if resolved is None:
            logger.debug("Unresolved import %r in %s", specifier, file_path)
            continue

        target_key = normalize_path(resolved, project_root)
        if is_internal_dependency(target_key):
            targets.append(target_key)
    return targets


def build_dependency_graph(
    files: Iterable[Path],
    project_root: Path,
    *,
    extract: Callable[[Path], list[str]] = extract_import_sources,
) -> GraphBuild:
    """Build the internal import graph for a set of files.

    Every file becomes a node even without edges. Resolved import targets
    are inserted as nodes too, whether or not they were in ``files``.
    Edges keep import order and duplicates.

    Args:
        files: Files to extract imports from
        project_root: Root used to compute node keys
        extract: Import extractor, re-parses each file by default

    Returns:
        GraphBuild with the graph and one warning per file whose imports
        could not be extracted or resolved.
    """
    result = GraphBuild()
    graph = result.graph

    for file_path in files:
        current_key = normalize_path(file_path, project_root)
        edges = graph.setdefault(current_key, [])

        try:
            targets = _resolve_targets(file_path, project_root, extract)
        except ParseError as exc:
            logger.warning("Skipping imports of %s: %s", file_path, exc.message)
            result.warnings.append(GraphBuildWarning(file_path, exc.message))
            continue
        except OSError as exc:
            message = f"cannot resolve imports: {exc.strerror or exc}"
            logger.warning("Skipping imports of %s: %s", file_path, message)
            result.warnings.append(GraphBuildWarning(file_path, message))
            continue

        for target_key in targets:
            edges.append(target_key)
            graph.setdefault(target_key, [])

    return result


__all__ = [
    "DependencyGraph",
    "GraphBuild",
    "GraphBuildWarning",
    "build_dependency_graph",
    "is_external_specifier",
    "is_internal_dependency",
    "resolve_import_path",
]
